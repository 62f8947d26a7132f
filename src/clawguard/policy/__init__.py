"""
Tool & Command Security Policy Engine.

Mediates between what the agent asks for and what the host executes.

Components (leaves first):
    1. Profile Table (minimal/coding/messaging/full/custom group flags)
    2. Group Classifier (tool name -> capability group)
    3. Tool Gate (blocklist > allowlist > group enablement)
    4. Command Segmenter (split at &&, ||, ;, |, & outside quotes)
    5. Obfuscation Detector (decode pipelines, fetch-and-exec, reverse shells)
    6. Command Policy Evaluator (allow-all / block-destructive / allowlist-only)

Every check is a pure function of an immutable SecurityConfig snapshot.
"""

from .commands import evaluate_command, is_command_allowed
from .engine import PolicyEngine
from .exceptions import PolicyError, SegmentationError
from .gate import is_tool_allowed
from .groups import TOOL_GROUPS, ToolGroup, all_groups, classify, group_tools
from .middleware import ToolPolicyMiddleware
from .obfuscation import find_obfuscation, looks_obfuscated
from .profiles import PROFILES, ProfileDef, get_profile
from .segmenter import segment
from .verdict import Verdict

__all__ = [
    "PROFILES",
    "PolicyEngine",
    "PolicyError",
    "ProfileDef",
    "SegmentationError",
    "TOOL_GROUPS",
    "ToolGroup",
    "ToolPolicyMiddleware",
    "Verdict",
    "all_groups",
    "classify",
    "evaluate_command",
    "find_obfuscation",
    "get_profile",
    "group_tools",
    "is_command_allowed",
    "is_tool_allowed",
    "looks_obfuscated",
    "segment",
]
