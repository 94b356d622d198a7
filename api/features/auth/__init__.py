"""Auth feature package: session login/logout and request guards."""
