"""Conversation state: history and the controller that drives it."""
