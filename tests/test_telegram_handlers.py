"""Tests for Telegram handlers."""

import asyncio
import json
from datetime import date, timedelta
from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
from telegram.ext import ConversationHandler

from diary.adapters.file_entries import FileEntryStore
from diary.adapters.file_settings import FileSettingsStore
from diary.telegram_bot import AuthFilter, send_entry_reminder
from diary.telegram_handlers import (
    fontsize_handler,
    parse_date_arg,
    read_handler,
    write_cancel_handler,
    write_date_handler,
    write_start_handler,
    write_text_handler,
)
from diary.telegram_states import WriteStates


@pytest.fixture
def entries(tmp_path):
    return FileEntryStore(tmp_path / "entries")


@pytest.fixture
def settings(tmp_path):
    return FileSettingsStore(tmp_path / "prefs.json")


@pytest.fixture
def context(entries, settings):
    return SimpleNamespace(args=[], bot_data={"entries": entries, "settings": settings}, user_data={})


def make_update(text=None, callback_data=None):
    update = MagicMock()
    update.message.text = text
    update.message.reply_text = AsyncMock()
    if callback_data is None:
        update.callback_query = None
    else:
        update.callback_query.data = callback_data
        update.callback_query.answer = AsyncMock()
        update.callback_query.edit_message_text = AsyncMock()
        update.callback_query.message.reply_text = AsyncMock()
    return update


def replies(mock):
    return [call.args[0] for call in mock.await_args_list]


class TestParseDateArg:
    def test_iso(self):
        assert parse_date_arg(" 2024-02-29 ") == date(2024, 2, 29)

    def test_keywords(self):
        assert parse_date_arg("Today") == date.today()
        assert parse_date_arg("yesterday") == date.today() - timedelta(days=1)

    def test_invalid(self):
        assert parse_date_arg("2023-02-29") is None
        assert parse_date_arg("someday") is None


class TestReadHandler:
    def test_sends_entry(self, context, entries):
        entries.write(date(2025, 3, 10), "Had a good day")
        context.args = ["2025-03-10"]
        update = make_update()

        asyncio.run(read_handler(update, context))

        assert replies(update.message.reply_text)[-1] == "Had a good day"

    def test_missing_entry(self, context):
        context.args = ["1999-01-01"]
        update = make_update()

        asyncio.run(read_handler(update, context))

        assert "No entry for" in replies(update.message.reply_text)[0]

    def test_empty_saved_entry_is_not_missing(self, context, entries):
        entries.write(date(2025, 3, 10), "")
        context.args = ["2025-03-10"]
        update = make_update()

        asyncio.run(read_handler(update, context))

        sent = replies(update.message.reply_text)
        assert sent == ["Entry for Monday, Mar 10 2025 is empty."]

    def test_splits_long_entries(self, context, entries):
        entries.write(date.today(), "x" * 9000)
        update = make_update()

        asyncio.run(read_handler(update, context))

        chunks = replies(update.message.reply_text)[1:]
        assert [len(c) for c in chunks] == [4000, 4000, 1000]

    def test_bad_date(self, context):
        context.args = ["soon"]
        update = make_update()

        asyncio.run(read_handler(update, context))

        assert replies(update.message.reply_text) == ["Use /read YYYY-MM-DD."]


class TestFontsizeHandler:
    def test_shows_current(self, context):
        update = make_update()
        asyncio.run(fontsize_handler(update, context))
        assert replies(update.message.reply_text) == ["Font size: 16"]

    def test_sets_value(self, context, settings):
        context.args = ["22"]
        update = make_update()

        asyncio.run(fontsize_handler(update, context))

        assert settings.get_font_size() == 22
        assert replies(update.message.reply_text) == ["Font size set to 22."]

    @pytest.mark.parametrize("arg", ["8", "31", "big"])
    def test_rejects_invalid(self, context, settings, arg):
        context.args = [arg]
        update = make_update()

        asyncio.run(fontsize_handler(update, context))

        assert settings.get_font_size() == 16
        assert "from 12 to 30" in replies(update.message.reply_text)[0]


class TestWriteConversation:
    def test_start_asks_for_date(self, context):
        update = make_update()
        state = asyncio.run(write_start_handler(update, context))
        assert state == WriteStates.DATE

    def test_typed_date_then_text_saves(self, context, entries):
        state = asyncio.run(write_date_handler(make_update(text="2025-03-10"), context))
        assert state == WriteStates.TEXT
        assert context.user_data["entry_date"] == "2025-03-10"

        update = make_update(text="Had a good day")
        state = asyncio.run(write_text_handler(update, context))

        assert state == ConversationHandler.END
        assert entries.read(date(2025, 3, 10)) == "Had a good day"
        assert replies(update.message.reply_text) == ["Diary entry saved!"]
        assert "entry_date" not in context.user_data

    def test_save_remembers_font_size(self, context, settings, tmp_path):
        context.user_data["entry_date"] = "2025-03-10"

        asyncio.run(write_text_handler(make_update(text="text"), context))

        assert json.loads((tmp_path / "prefs.json").read_text()) == {"font_size": 16}

    def test_empty_existing_entry_is_reported(self, context, entries):
        entries.write(date(2025, 3, 10), "")
        update = make_update(text="2025-03-10")

        asyncio.run(write_date_handler(update, context))

        sent = replies(update.message.reply_text)
        assert len(sent) == 1
        assert "already has an entry" in sent[0]

    def test_button_date(self, context):
        update = make_update(callback_data="date:yesterday")

        state = asyncio.run(write_date_handler(update, context))

        assert state == WriteStates.TEXT
        assert context.user_data["entry_date"] == (date.today() - timedelta(days=1)).isoformat()
        update.callback_query.answer.assert_awaited_once()

    def test_invalid_date_stays_in_date_state(self, context):
        update = make_update(text="next tuesday")
        state = asyncio.run(write_date_handler(update, context))
        assert state == WriteStates.DATE
        assert "entry_date" not in context.user_data

    def test_shows_existing_entry(self, context, entries):
        entries.write(date(2025, 3, 10), "earlier text")
        update = make_update(text="2025-03-10")

        asyncio.run(write_date_handler(update, context))

        sent = replies(update.message.reply_text)
        assert "already has an entry" in sent[0]
        assert sent[1] == "earlier text"

    def test_save_failure_keeps_conversation_open(self, context):
        context.user_data["entry_date"] = "2025-03-10"
        context.bot_data["entries"] = MagicMock()
        context.bot_data["entries"].write.side_effect = OSError("disk full")
        update = make_update(text="text")

        state = asyncio.run(write_text_handler(update, context))

        assert state == WriteStates.TEXT
        assert "Could not save" in replies(update.message.reply_text)[0]

    def test_cancel(self, context):
        context.user_data["entry_date"] = "2025-03-10"
        update = make_update()

        state = asyncio.run(write_cancel_handler(update, context))

        assert state == ConversationHandler.END
        assert context.user_data == {}


class TestAuthFilter:
    def test_open_when_no_users(self):
        assert AuthFilter([]).check_update(MagicMock())

    def test_allowlist(self):
        update = MagicMock()
        update.effective_user.id = 42
        assert AuthFilter([42]).check_update(update)
        assert not AuthFilter([7]).check_update(update)


class TestEntryReminder:
    def test_sends_when_no_entry_today(self, entries):
        bot = MagicMock()
        bot.send_message = AsyncMock()

        asyncio.run(send_entry_reminder(bot, [1, 2], entries))

        assert bot.send_message.await_count == 2

    def test_skips_when_entry_exists(self, entries):
        entries.write(date.today(), "done")
        bot = MagicMock()
        bot.send_message = AsyncMock()

        asyncio.run(send_entry_reminder(bot, [1], entries))

        bot.send_message.assert_not_awaited()
