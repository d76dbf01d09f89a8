"""Agent-side helpers that sit next to the adapter."""

from services.qwen_adapter.core.agent.next_speaker import NextSpeakerResponse, check_next_speaker

__all__ = ["NextSpeakerResponse", "check_next_speaker"]
