"""Services — the individual provisioning steps."""
