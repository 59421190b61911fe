"""Link and codec doubles."""
