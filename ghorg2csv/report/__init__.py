"""Turn retrieved repositories and admins into CSV report rows."""
