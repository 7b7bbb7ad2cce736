"""Telegram bot implementation package.

Contains the command parser, update classification and routing, command
handlers and message templates. Turns inbound Telegram updates into calls
to the backend services and replies to the originating chat.
"""
