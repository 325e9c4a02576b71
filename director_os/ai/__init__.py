"""
Director OS
AI executive summary: PII masking, LLM provider, unmasking for display.
"""
