"""External service clients package.

Contains the Telegram gateway, the Supabase store client and the order
notification channel, plus the protocols handlers depend on.
"""
