"""AWS client construction and provider error recognition."""
