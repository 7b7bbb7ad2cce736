"""Telegram bot message templates and constants.

Contains every user-facing reply: command help, per-step error messages for
the /add_product and /update_order flows, and success confirmations.
Centralizes wording so handlers only pick and format templates.
"""

# Command tokens
ADD_PRODUCT_COMMAND = "/add_product"
UPDATE_ORDER_COMMAND = "/update_order"
START_COMMAND = "/start"
HELP_COMMAND = "/help"

PRODUCT_CAPTION_FORMAT = (
    "/add_product\n"
    "Name: Product Name\n"
    "Price: 99.99\n"
    "Description: Product description"
)
ORDER_UPDATE_FORMAT = "/update_order <order_number> <status> [tracking=<tracking_number>]"

START_MESSAGE = (
    "👋 Welcome to the Telegram-Supabase Bridge Bot!\n\n"
    "📦 Available Commands:\n\n"
    "📸 /add_product - Add a new product\n"
    "   Send a photo with caption:\n"
    "   /add_product\n"
    "   Name: Product Name\n"
    "   Price: 99.99\n"
    "   Description: Product description\n\n"
    "📮 /update_order - Update order status\n"
    f"   Format: {ORDER_UPDATE_FORMAT}\n"
    "   Example: /update_order 123 shipped tracking=1Z999999\n\n"
    "ℹ️ /help - Show this help message"
)

HELP_MESSAGE = (
    "📚 Help - Telegram-Supabase Bridge\n\n"
    "This bot allows you to manage products and orders through Telegram.\n\n"
    "📸 Add Product:\n"
    "1. Send a photo of the product\n"
    "2. Add a caption starting with /add_product\n"
    "3. Include Name, Price, and Description fields\n\n"
    "📮 Update Order:\n"
    "1. Use the command: /update_order <order_number> <status>\n"
    "2. Optionally add tracking: tracking=<tracking_number>\n"
    "3. The customer will be notified via email\n\n"
    "❓ Need more help? Contact support."
)

# Generic error wrapper for parser messages
ERROR_PREFIX = "❌ Error: {message}"

# /add_product errors
ERROR_PHOTO_REQUIRED = "❌ Error: Please send a photo with the /add_product command."
ERROR_CAPTION_REQUIRED = (
    "❌ Error: Please include a caption with product details.\n\n"
    f"Format:\n{PRODUCT_CAPTION_FORMAT}"
)
ERROR_CAPTION_PREFIX = "❌ Error: Caption must start with /add_product"
PRODUCT_FORMAT_HINT = f"\n\nFormat:\n{PRODUCT_CAPTION_FORMAT}"
ERROR_IMAGE_DOWNLOAD = (
    "❌ Error: Could not download the photo from Telegram.\n\n"
    "Please try again or contact support if the issue persists."
)
ERROR_IMAGE_UPLOAD = (
    "❌ Error adding product: the image could not be uploaded to storage.\n\n"
    "Please try again or contact support if the issue persists."
)
ERROR_PRODUCT_SAVE = (
    "❌ Error adding product: the product could not be saved.\n\n"
    "Please try again or contact support if the issue persists."
)
ERROR_PRODUCT_UNEXPECTED = (
    "❌ Error adding product: an unexpected error occurred.\n\n"
    "Please try again or contact support if the issue persists."
)

# /update_order errors
ERROR_ORDER_TEXT_REQUIRED = "❌ Error: No text provided for order update."
ORDER_FORMAT_HINT = f"\n\nFormat: {ORDER_UPDATE_FORMAT}"
ERROR_ORDER_NOT_FOUND = "❌ Error: Order '{order_number}' not found in the database."
ERROR_ORDER_LOOKUP = (
    "❌ Error updating order: the order could not be looked up.\n\n"
    "Please try again or contact support if the issue persists."
)
ERROR_ORDER_SAVE = (
    "❌ Error updating order: the order could not be saved.\n\n"
    "Please try again or contact support if the issue persists."
)
ERROR_ORDER_UNEXPECTED = (
    "❌ Error updating order: an unexpected error occurred.\n\n"
    "Please try again or contact support if the issue persists."
)

# Success confirmations
PRODUCT_ADDED_HEADER = "✅ Product '{name}' added successfully."
PRODUCT_PRICE_LINE = "💰 Price: ${price}"
PRODUCT_ID_LINE = "🆔 Product ID: {product_id}"
PRODUCT_IMAGE_LINE = "🖼️ Image: {image_url}"

ORDER_UPDATED_HEADER = "✅ Order {order_number} has been updated to '{status}'."
ORDER_CUSTOMER_LINE = "📧 Customer: {customer}"
ORDER_TRACKING_LINE = "📮 Tracking: {tracking_number}"
ORDER_NOTIFICATION_LINE = "💌 Email notification queued for customer."
UNKNOWN_CUSTOMER = "unknown"
