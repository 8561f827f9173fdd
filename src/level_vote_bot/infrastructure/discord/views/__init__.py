"""Interactive Discord views and modals."""
