"""Infrastructure layer — in-memory collaborators and store file loading.

Depends on domain only. Never imports from services or commands.
"""
