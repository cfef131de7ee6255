"""Link preview (summary service) adapter."""
