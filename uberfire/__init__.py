"""UberFire workbench navigation state."""
