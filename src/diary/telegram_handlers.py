"""Telegram command handlers."""

import logging
from datetime import date, timedelta

from telegram import InlineKeyboardButton, InlineKeyboardMarkup, Update
from telegram.ext import ContextTypes, ConversationHandler

from .core.settings import MAX_FONT_SIZE, MIN_FONT_SIZE, is_valid_font_size
from .telegram_states import WriteStates
from .workflows import aload_font_size, aread_entry, asave_entry, aset_font_size

logger = logging.getLogger(__name__)

# Telegram caps messages at 4096 chars
MESSAGE_LIMIT = 4000


def parse_date_arg(text: str) -> date | None:
    """Parse `today`, `yesterday` or YYYY-MM-DD. Returns None if invalid."""
    text = text.strip().lower()
    if text == "today":
        return date.today()
    if text == "yesterday":
        return date.today() - timedelta(days=1)
    try:
        return date.fromisoformat(text)
    except ValueError:
        return None


def _format_day(day: date) -> str:
    return day.strftime("%A, %b %d %Y")


async def _reply_long(message, text: str) -> None:
    for i in range(0, len(text), MESSAGE_LIMIT):
        await message.reply_text(text[i : i + MESSAGE_LIMIT])


# ============== Simple Commands ==============


async def start_handler(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Handle /start command."""
    await update.message.reply_text(
        "Hi! I'm your diary.\n\n"
        "Commands:\n"
        "/write - Write an entry\n"
        "/read - Read today's entry (or /read YYYY-MM-DD)\n"
        "/fontsize - Show or set the font size\n"
        "/help - Show all commands"
    )


async def help_handler(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Handle /help command."""
    await update.message.reply_text(
        "*Diary Commands*\n\n"
        "/write - Pick a date and write an entry\n"
        "/read [YYYY-MM-DD] - Show an entry\n"
        f"/fontsize [{MIN_FONT_SIZE}-{MAX_FONT_SIZE}] - Show or set the font size\n"
        "/cancel - Cancel current operation\n",
        parse_mode="Markdown",
    )


async def read_handler(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Handle /read [date] - show a stored entry."""
    day = date.today()
    if context.args:
        day = parse_date_arg(context.args[0])
        if day is None:
            await update.message.reply_text("Use /read YYYY-MM-DD.")
            return

    entries = context.bot_data["entries"]
    text = await aread_entry(entries, day)
    if text is None:
        await update.message.reply_text(f"No entry for {_format_day(day)}.")
        return

    if not text:
        await update.message.reply_text(f"Entry for {_format_day(day)} is empty.")
        return

    await update.message.reply_text(f"Entry for {_format_day(day)}:")
    await _reply_long(update.message, text)


async def fontsize_handler(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Handle /fontsize [n] - show or set the font size."""
    settings = context.bot_data["settings"]

    if not context.args:
        size = await aload_font_size(settings)
        await update.message.reply_text(f"Font size: {size}")
        return

    try:
        size = int(context.args[0])
    except ValueError:
        size = None
    if size is None or not is_valid_font_size(size):
        await update.message.reply_text(f"Font size must be a number from {MIN_FONT_SIZE} to {MAX_FONT_SIZE}.")
        return

    try:
        await aset_font_size(settings, size)
    except OSError as e:
        logger.error(f"Failed to save font size: {e}")
        await update.message.reply_text("Could not save font size. Check logs.")
        return
    await update.message.reply_text(f"Font size set to {size}.")


# ============== Write Conversation ==============


async def write_start_handler(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Start the write conversation by asking for a date."""
    keyboard = [
        [
            InlineKeyboardButton("Today", callback_data="date:today"),
            InlineKeyboardButton("Yesterday", callback_data="date:yesterday"),
        ],
    ]
    await update.message.reply_text(
        "Which day is this entry for?\n"
        "_Tap an option or type a date as YYYY-MM-DD_",
        parse_mode="Markdown",
        reply_markup=InlineKeyboardMarkup(keyboard),
    )
    return WriteStates.DATE


async def write_date_handler(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Handle the date choice, then ask for the entry text."""
    if update.callback_query:
        query = update.callback_query
        await query.answer()
        day = parse_date_arg(query.data.removeprefix("date:"))
        reply = query.edit_message_text
    else:
        day = parse_date_arg(update.message.text)
        reply = update.message.reply_text

    if day is None:
        await reply("That's not a date. Type it as YYYY-MM-DD.")
        return WriteStates.DATE

    context.user_data["entry_date"] = day.isoformat()

    existing = await aread_entry(context.bot_data["entries"], day)
    if existing is not None:
        await reply(
            f"{_format_day(day)} already has an entry. Sending new text will replace it.\n\n"
            "Current entry follows."
        )
        message = update.callback_query.message if update.callback_query else update.message
        if existing:
            await _reply_long(message, existing)
    else:
        await reply(f"Writing for {_format_day(day)}. Send your entry.")

    return WriteStates.TEXT


async def write_text_handler(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Save the entry text."""
    day = date.fromisoformat(context.user_data["entry_date"])
    text = update.message.text
    settings = context.bot_data["settings"]

    try:
        font_size = await aload_font_size(settings)
        await asave_entry(context.bot_data["entries"], settings, day, text, font_size)
    except OSError as e:
        logger.error(f"Failed to save entry for {day}: {e}")
        await update.message.reply_text("Could not save your entry. Try again later.")
        return WriteStates.TEXT

    context.user_data.pop("entry_date", None)
    await update.message.reply_text("Diary entry saved!")
    return ConversationHandler.END


async def write_cancel_handler(update: Update, context: ContextTypes.DEFAULT_TYPE):
    """Cancel the write conversation."""
    context.user_data.pop("entry_date", None)
    await update.message.reply_text("Entry cancelled.")
    return ConversationHandler.END
