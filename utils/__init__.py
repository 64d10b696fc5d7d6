"""Utility helpers for the DeeTEE bridge."""
