"""Settings and AWS client construction shared by the providers."""
