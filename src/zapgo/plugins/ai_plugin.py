"""
AI assistant stub.

There is no model behind this plugin; it echoes the question inside a
canned reply so the palette flow can be exercised end to end.
"""

from .base import BasePlugin
from .parser import split_tokens
from .types import ExecutionResult, ParamDefinition


class AIPlugin(BasePlugin):
    """Answers free-text questions with a simulated reply."""

    def __init__(self):
        super().__init__(
            name="AI助手",
            description="与AI助手对话",
            triggers=["ai", "问答", "ask", "问"],
            params=[ParamDefinition(name="问题", required=True, description="要询问的问题")],
            icon="🤖",
        )

    def extract_question(self, input_text: str) -> str:
        """Return the question text.

        Input led by one of the plugin's own triggers asks everything after
        it; anything else (the plugin serving as fallback) is the question
        as a whole.
        """
        tokens = split_tokens(input_text)
        if not tokens:
            return ""
        if tokens[0].lower() in {t.lower() for t in self.triggers}:
            return " ".join(tokens[1:])
        return " ".join(tokens)

    async def execute(self, input_text: str) -> ExecutionResult:
        question = self.extract_question(input_text)

        if not question:
            return ExecutionResult(
                icon="❓",
                title="AI助手",
                content="请输入您的问题。例如：ai 今天天气怎么样？",
            )

        self.logger.debug(f"Answering question: {question[:50]}")
        return ExecutionResult(
            icon="🤖",
            title="AI助手回复",
            content=f"您问的是：\"{question}\"\n\n抱歉，这是一个模拟回复。实际的AI功能需要接入真实的AI服务。",
        )
