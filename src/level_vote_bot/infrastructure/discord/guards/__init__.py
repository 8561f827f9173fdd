"""Discord guard helpers shared by cogs and views."""
