def error_message(e):
    # APIError and AuthError carry the backend message apart from the repr
    return getattr(e, "message", None) or str(e)
