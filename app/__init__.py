"""Telegram to Supabase Store Bridge Package.

A webhook-driven Telegram bot that turns structured commands into backend
writes: a photo captioned with /add_product becomes a product with a stored
image, and /update_order changes an order's status and tracking number.

The application follows a modular architecture with separate concerns for:
- Command parsing and update routing
- Command handlers and user-facing replies
- Telegram and Supabase clients
- The aiohttp webhook server
"""
