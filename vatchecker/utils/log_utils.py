def sanitize_for_log(value):
    """Escapes CR/LF so caller-supplied values cannot forge log lines."""
    if value is None:
        return "None"
    return str(value).replace("\r", "\\r").replace("\n", "\\n")
