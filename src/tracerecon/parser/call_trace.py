"""Short text rendering of the top of a call tree, for the report excerpt."""

from tracerecon.domain.models.trace import CallNode

EXCERPT_NODES = 4
MAX_DEPTH = 3


def _describe(node: CallNode) -> str:
    parts = [node.call_type, f"{node.from_address} -> {node.to_address}"]
    if node.function_name:
        parts.append(f"[{node.function_name}]")
    if node.value and node.value not in ("0", "0x", "0x0"):
        parts.append(f"value={node.value}")
    if node.error:
        parts.append(f"error={node.error}")
    return " ".join(parts)


def summarize_call_trace(nodes: list[CallNode], max_depth: int = MAX_DEPTH) -> str:
    lines: list[str] = []

    def walk(node: CallNode, depth: int) -> None:
        lines.append("  " * depth + _describe(node))
        if depth + 1 >= max_depth:
            if node.calls:
                lines.append("  " * (depth + 1) + f"... {len(node.calls)} nested calls")
            return
        for child in node.calls:
            walk(child, depth + 1)

    for node in nodes:
        walk(node, 0)
    return "\n".join(lines)
