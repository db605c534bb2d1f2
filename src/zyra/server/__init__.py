"""Request dispatch: chain execution, error responses, and ASGI emission."""
