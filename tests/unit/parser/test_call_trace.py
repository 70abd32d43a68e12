from tracerecon.domain.models.trace import CallNode
from tracerecon.parser.call_trace import summarize_call_trace


def _node(fn: str | None = None, calls: list[CallNode] | None = None, **kwargs) -> CallNode:
    return CallNode(
        call_type=kwargs.get("call_type", "CALL"),
        from_address=kwargs.get("from_address", "0xattacker"),
        to_address=kwargs.get("to_address", "0xexecutor"),
        function_name=fn,
        value=kwargs.get("value"),
        error=kwargs.get("error"),
        calls=calls or [],
    )


class TestSummarizeCallTrace:
    def test_single_node(self):
        text = summarize_call_trace([_node("executeThreeVictimAttack")])
        assert text == "CALL 0xattacker -> 0xexecutor [executeThreeVictimAttack]"

    def test_children_indented(self):
        root = _node("attack", calls=[_node("flashMint", call_type="DELEGATECALL")])
        lines = summarize_call_trace([root]).splitlines()
        assert len(lines) == 2
        assert lines[1].startswith("  DELEGATECALL")

    def test_depth_cap_summarizes_nested_calls(self):
        deep = _node("a", calls=[_node("b", calls=[_node("c", calls=[_node("d"), _node("e")])])])
        lines = summarize_call_trace([deep], max_depth=2).splitlines()
        assert lines[-1].strip() == "... 1 nested calls"
        assert not any("[c]" in line for line in lines)

    def test_zero_value_omitted_nonzero_shown(self):
        assert "value=" not in summarize_call_trace([_node("f", value="0x0")])
        assert "value=0x10" in summarize_call_trace([_node("f", value="0x10")])

    def test_error_shown(self):
        assert "error=execution reverted" in summarize_call_trace([_node("f", error="execution reverted")])

    def test_empty(self):
        assert summarize_call_trace([]) == ""

    def test_parses_provider_aliases(self):
        node = CallNode.model_validate({"callType": "STATICCALL", "from": "0xa", "to": "0xb", "functionName": "balanceOf"})
        assert summarize_call_trace([node]) == "STATICCALL 0xa -> 0xb [balanceOf]"
