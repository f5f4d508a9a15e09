"""
iFlow provider package.

Exports:
- IFlowProvider: streaming chat adapter for the iFlow chat-completions API
"""

from .client import IFlowProvider

__all__ = ["IFlowProvider"]
