"""Request controllers for the client registry."""
