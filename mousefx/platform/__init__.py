"""Platform input backends. Import submodules directly: they pull in their window libraries."""
