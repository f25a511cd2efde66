def truncate_diff(diff: str, max_chars: int) -> str:
    """Cap a diff at ``max_chars`` so the prompt stays within model limits."""
    if max_chars and len(diff) > max_chars:
        return diff[:max_chars] + "\n... [diff truncated]"
    return diff


def truncate_line(text: str, max_len: int) -> str:
    if len(text) <= max_len:
        return text
    return text[: max_len - 3] + "..."
