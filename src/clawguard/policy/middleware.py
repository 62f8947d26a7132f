"""
Tool Policy Middleware for Agent Framework.

ChatMiddleware that applies the Tool Gate before each LLM call, so the
model is only offered tools it is allowed to use.
"""

import logging
from typing import Any

from agent_framework import ChatContext, ChatMiddleware

from .engine import PolicyEngine

logger = logging.getLogger(__name__)


class ToolPolicyMiddleware(ChatMiddleware):
    """
    Middleware that filters the offered tool list through the policy engine.

    Intercepts the tool list in ``context.options`` and replaces it with
    the filtered set from PolicyEngine.
    """

    def __init__(self, engine: PolicyEngine) -> None:
        """
        Initialize middleware with a policy engine.

        Args:
            engine: Configured PolicyEngine instance.
        """
        self.engine = engine

    async def process(self, context: ChatContext, call_next: Any) -> None:
        """
        Filter tools before passing to the LLM.

        Args:
            context: Chat context containing options with tools.
            call_next: Callable to invoke the next middleware or LLM.
        """
        tools = context.options.get("tools", [])

        filtered = self.engine.filter_tools(tools)
        context.options["tools"] = filtered

        logger.debug(
            f"🔒 ToolPolicyMiddleware: {len(tools)} → {len(filtered)} tools"
        )

        await call_next()
