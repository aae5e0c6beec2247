"""Job application tracker packages."""
