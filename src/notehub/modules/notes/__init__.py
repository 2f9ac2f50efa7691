"""Notes module - tenant-scoped note CRUD."""

# Module metadata
__module_info__ = {
    "name": "notes",
    "version": "1.0.0",
    "description": "Tenant-scoped notes with plan quota",
    "dependencies": ["tenants", "users"],
}
