"""Diary Telegram Bot."""

import logging
from datetime import date

from telegram import Bot, Update
from telegram.ext import (
    Application,
    CallbackQueryHandler,
    CommandHandler,
    ConversationHandler,
    MessageHandler,
    filters,
)
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger

from .config import Config, load_config
from .ports import EntryStore
from .telegram_handlers import (
    fontsize_handler,
    help_handler,
    read_handler,
    start_handler,
    write_cancel_handler,
    write_date_handler,
    write_start_handler,
    write_text_handler,
)
from .telegram_states import WriteStates
from .workflows import get_entry_store, get_settings_store

logger = logging.getLogger(__name__)


class AuthFilter(filters.BaseFilter):
    """Filter to only allow authorized users."""

    def __init__(self, allowed_users: list[int]):
        super().__init__()
        self.allowed_users = allowed_users

    def check_update(self, update: Update) -> bool:
        if not self.allowed_users:
            return True  # No restriction if no users configured
        user = update.effective_user
        if user is None:
            return False
        return user.id in self.allowed_users


def create_application(config: Config | None = None) -> Application:
    """Create and configure the Telegram bot application."""
    if config is None:
        config = load_config()

    if not config.telegram_bot_token:
        raise ValueError(
            "TELEGRAM_BOT_TOKEN not configured. "
            "Get a token from @BotFather on Telegram and add it to diary.conf"
        )

    app = Application.builder().token(config.telegram_bot_token).build()

    # Stores are shared by every handler through bot_data
    app.bot_data["entries"] = get_entry_store(config)
    app.bot_data["settings"] = get_settings_store(config)

    auth_filter = AuthFilter(config.telegram_allowed_users)

    app.add_handler(CommandHandler("start", start_handler, filters=auth_filter))
    app.add_handler(CommandHandler("help", help_handler, filters=auth_filter))
    app.add_handler(CommandHandler("read", read_handler, filters=auth_filter))
    app.add_handler(CommandHandler("fontsize", fontsize_handler, filters=auth_filter))

    write_conv = ConversationHandler(
        entry_points=[CommandHandler("write", write_start_handler, filters=auth_filter)],
        states={
            WriteStates.DATE: [
                CallbackQueryHandler(write_date_handler, pattern=r"^date:"),
                MessageHandler(filters.TEXT & ~filters.COMMAND, write_date_handler),
            ],
            WriteStates.TEXT: [
                MessageHandler(filters.TEXT & ~filters.COMMAND, write_text_handler),
            ],
        },
        fallbacks=[CommandHandler("cancel", write_cancel_handler)],
        per_user=True,
    )
    app.add_handler(write_conv)

    async def unauthorized_handler(update: Update, context):
        user = update.effective_user
        logger.warning(f"Unauthorized access attempt from user {user.id} ({user.username})")
        await update.message.reply_text(
            "Unauthorized. This diary is private.\n"
            "If you're the owner, add your Telegram user ID to TELEGRAM_ALLOWED_USERS in diary.conf"
        )

    if config.telegram_allowed_users:
        app.add_handler(MessageHandler(~auth_filter & filters.ALL, unauthorized_handler))

    return app


def setup_scheduler(app: Application, config: Config | None = None) -> AsyncIOScheduler:
    """Set up the evening writing reminder."""
    if config is None:
        config = load_config()

    scheduler = AsyncIOScheduler(timezone=config.timezone or "UTC")

    if config.telegram_reminder_time and config.telegram_allowed_users:
        try:
            hour, minute = map(int, config.telegram_reminder_time.split(":"))
            scheduler.add_job(
                send_entry_reminder,
                CronTrigger(hour=hour, minute=minute),
                args=[app.bot, config.telegram_allowed_users, app.bot_data["entries"]],
                id="entry_reminder",
            )
            logger.info(f"Scheduled entry reminder at {hour:02d}:{minute:02d}")
        except ValueError:
            logger.warning(f"Invalid reminder time format: {config.telegram_reminder_time}")

    return scheduler


async def send_entry_reminder(bot: Bot, user_ids: list[int], entries: EntryStore):
    """Remind users to write if today has no entry yet."""
    if entries.exists(date.today()):
        logger.info("Entry already exists for today, skipping reminder")
        return

    logger.info("Sending entry reminder")
    for user_id in user_ids:
        try:
            await bot.send_message(
                chat_id=user_id,
                text="You haven't written today.\n\nUse /write to add an entry.",
            )
        except Exception as e:
            logger.error(f"Failed to send reminder to user {user_id}: {e}")


def run_bot():
    """Run the Telegram bot."""
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=logging.INFO,
    )

    config = load_config()
    app = create_application(config)
    scheduler = setup_scheduler(app, config)

    async def post_init(application: Application) -> None:
        """Start scheduler after event loop is running."""
        scheduler.start()
        logger.info("Scheduler started")

    app.post_init = post_init

    if config.telegram_allowed_users:
        logger.info(f"Bot authorized for users: {config.telegram_allowed_users}")
    else:
        logger.warning("No TELEGRAM_ALLOWED_USERS configured - bot is open to anyone!")

    logger.info("Starting Diary Telegram bot...")

    app.run_polling(allowed_updates=Update.ALL_TYPES)
