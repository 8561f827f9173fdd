"""Discord adapters implementing application ports."""
