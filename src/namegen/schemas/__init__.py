"""Pydantic schemas for tools, fields and generation results."""
