"""Rule-based detection of likely errors in a water bill."""
