# AI Core module

"""
AI Core Module - Moderation and the AI assistant.

Key responsibilities:
- Rule-based content moderation (score, decide, sanitize)
- Chat completions for team questions (SAP GenAI proxy)
"""
