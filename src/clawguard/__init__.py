"""
ClawGuard - Tool & Command Security Policy Engine

This package mediates between what an LLM-driven agent asks for and what
the host actually executes:
- Profile-based enablement of tool groups
- Per-tool allow/deny checks
- Shell command segmentation, obfuscation detection and tiered policy
- Policy-gated tool implementations and a tool dispatcher

Every decision is a pure function of an immutable SecurityConfig snapshot.
"""

__version__ = "0.1.0"
__author__ = "ClawGuard Engineering Team"
