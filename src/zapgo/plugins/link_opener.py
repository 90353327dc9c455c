"""
Templated link opener.

A command configures the plugin with a URL template and a comma separated
list of placeholder names. Each placeholder becomes a required positional
parameter and `{$name}` in the template is replaced by its argument:

    template:     https://www.google.com/search?q={$q}
    placeholders: q
    input:        g python  ->  https://www.google.com/search?q=python
"""

from typing import Dict, List, Optional

from .base import BasePlugin
from .types import ExecutionResult, ParamDefinition
from ..host import HostBridge


class LinkOpenerPlugin(BasePlugin):
    """Opens website links or application protocol links."""

    CONFIG_TEMPLATE = "template"
    CONFIG_PLACEHOLDERS = "placeholders"

    def __init__(self, host: HostBridge):
        super().__init__(
            name="链接打开器",
            description="打开网站链接或应用协议链接",
            triggers=["open"],
            params=[],
            icon="🔗",
        )
        self.host = host
        self.template = ""
        self.placeholder_keys: List[str] = []

    def set_config_params(self, params: Optional[Dict[str, str]]) -> None:
        """Rebuild the parameter schema from the template configuration."""
        if not params:
            return

        super().set_config_params(params)
        self.template = params.get(self.CONFIG_TEMPLATE, "")
        placeholders = params.get(self.CONFIG_PLACEHOLDERS, "")
        self.placeholder_keys = [key.strip() for key in placeholders.split(",") if key.strip()]
        self.params = [
            ParamDefinition(name=key, required=True, description=key)
            for key in self.placeholder_keys
        ]

    def get_config_params(self) -> List[str]:
        return [self.CONFIG_TEMPLATE, self.CONFIG_PLACEHOLDERS]

    def assemble_url(self, input_text: str) -> Optional[str]:
        """Fill the template from the input, or None if any placeholder is unbound."""
        if not self.template:
            return None

        parsed = self.parse_input(input_text)
        if not parsed.is_valid:
            return None

        url = self.template
        for key, argument in zip(self.placeholder_keys, parsed.arguments):
            url = url.replace(f"{{${key}}}", argument.value or "")
        return url

    def can_execute(self, input_text: str) -> bool:
        return self.assemble_url(input_text) is not None

    async def execute(self, input_text: str) -> ExecutionResult:
        url = self.assemble_url(input_text)
        if url:
            self.logger.info(f"Opening link: {url}")
            self.host.open_url(url)

        return ExecutionResult(
            icon="🔗",
            title="打开链接",
            content=url or "无效链接",
        )
