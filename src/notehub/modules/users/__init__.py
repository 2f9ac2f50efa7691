"""Users module - the credential store."""

# Module metadata
__module_info__ = {
    "name": "users",
    "version": "1.0.0",
    "description": "Seeded user accounts and login lookup",
    "dependencies": ["tenants"],
}
