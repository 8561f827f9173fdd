"""Keep-alive HTTP endpoint."""
