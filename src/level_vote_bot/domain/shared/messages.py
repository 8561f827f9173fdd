"""Centralized message constants for error messages, validation, and user feedback."""

from __future__ import annotations


class ErrorMessages:
    """Error messages for exceptions and validation failures."""

    # Discord ID Validation Errors
    INVALID_SNOWFLAKE = "Discord snowflake ID must be positive"
    SNOWFLAKE_TOO_LARGE = "Discord snowflake ID exceeds maximum value (2^64)"

    # Settings Validation Errors
    INVALID_LOG_LEVEL = "Invalid log level: {level}. Must be one of {valid_levels}"

    # Level Validation Errors
    TEXT_REQUIRED = "{field} must not be blank"
    SCORE_NOT_INTEGER = "{dimension} score must be a whole number"
    SCORE_OUT_OF_RANGE = "{dimension} score must be between {minimum} and {maximum}"
    SCORE_LENGTH_MISMATCH = "Score sequences and voter list must have equal lengths"
    DUPLICATE_VOTER = "Voter '{user_id}' appears more than once"
    DUPLICATE_LEVEL_IN_BLOB = "Level '{level_id}' appears more than once in stored data"

    # Thread Reference Errors
    THREAD_REFERENCE_CHANNEL_LINK = "❌ This is a channel link. Provide thread link or ID."
    THREAD_REFERENCE_INVALID = "❌ Invalid thread link or ID."

    # Persistence Errors
    STORE_READ_FAILED = "Could not read the level store"
    STORE_WRITE_FAILED = "Could not write the level store"
    STORE_MALFORMED = "Stored level data is malformed: {error}"
    STORE_RECORD_MALFORMED = "Stored level #{index} is malformed: {error}"
    STORE_DEGRADED = "Level store could not be read; refusing to overwrite it"
    GOOGLE_REQUEST_FAILED = "Google Docs request failed: {error}"
    GOOGLE_CREDENTIALS_INVALID = "GOOGLE_SERVICE_ACCOUNT is not valid service-account JSON"

    # Authentication/Security Errors
    DISCORD_TOKEN_REQUIRED = "DISCORD_TOKEN environment variable is required"
    BOT_NOT_INITIALIZED = "Bot not initialized. Call set_bot() first."
    CONTAINER_NOT_FOUND = "Container not found on bot instance"


class LogTemplates:
    """Log message templates for structured logging.

    Use these with logger.info(), logger.error(), etc. and pass values as parameters
    for proper log formatting and structured logging support.
    """

    # Persistence
    STORE_LOADED = "Loaded %d pending level(s) from %s"
    STORE_SAVED = "Saved %d pending level(s) to %s"
    STORE_LOAD_FAILED = "Failed to load pending levels from %s: %s"
    STORE_SAVE_FAILED = "Failed to save pending levels to %s: %s"
    STORE_MISSING = "No pending level data at %s, starting empty"
    STORE_LEGACY_VOTERS = "Level %s has %d vote(s) without voter ids, filled placeholders"
    STORE_MUTATION_REFUSED = "Refusing to save levels after a degraded load from %s"
    STORE_FALLBACK_WRITE = "Primary store write failed, wrote fallback copy to %s"
    GOOGLE_CLIENT_INITIALIZED = "Google Docs client initialized for %s"
    GOOGLE_CLIENT_INIT_FAILED = "Failed to init Google service account: %s"

    # Workflows
    LEVEL_ACCEPTED = "Accepted level %s (%s) by %s"
    LEVEL_REMOVED = "Removed level %s by %s (reason: %s)"
    LEVEL_VOTES_RESET = "Reset votes for level %s by %s"
    VOTE_RECORDED = "Recorded vote by %s on level %s"
    VOTE_REJECTED = "Rejected vote by %s on level %s: %s"
    RANKING_EXPORTED = "Exported ranking of %d level(s) to document %s"
    RANKING_EXPORT_FAILED = "Ranking export failed: %s"
    METADATA_LOOKUP_FAILED = "Thread metadata lookup failed for %s: %s"
    METADATA_NOT_FORUM = "Channel %s is not a forum channel"

    # Notifications
    NOTIFY_FAILED = "Failed to send %s notification for level %s: %s"
    REACTION_FAILED = "Failed to add reaction %s: %s"
    ANNOUNCEMENT_SEND_FAILED = "Announcement send failed: %s"

    # Verification
    VERIFY_GRANTED = "Granted role '%s' to %s"
    VERIFY_ROLE_MISSING = "Verification role '%s' not found in guild %s"

    # Uptime server
    UPTIME_STARTED = "Uptime server listening on port %d"
    UPTIME_STOPPED = "Uptime server stopped"
    UPTIME_START_FAILED = "Failed to start uptime server: %s"

    # Application Lifecycle
    BOT_STARTING = "Starting Level Vote Bot in {environment} mode"
    STORAGE_PRIMARY = "Pending levels live in Google Doc %s (fallback copy at %s)"
    STORAGE_LOCAL_ONLY = "Pending levels live in local file %s"
    STORAGE_RANKED_DOC_UNSET = "GOOGLE_RANKED_DOC_ID not set, !saveranked is disabled"
    STORAGE_RANKED_NO_CREDENTIALS = "Ranked doc %s configured without Google credentials"
    STORAGE_DOC_NO_CREDENTIALS = "GOOGLE_DOC_ID %s set without Google credentials, ignoring it"
    BOT_SETUP = "Setting up bot..."
    BOT_CONTAINER_INITIALIZED = "Container initialized successfully"
    BOT_CONTAINER_INIT_FAILED = "Failed to initialize container: %s"
    BOT_SETUP_COMPLETE = "Bot setup complete"
    BOT_STARTING_RUN = "Starting bot..."
    BOT_STOPPED = "Bot stopped successfully"
    BOT_KEYBOARD_INTERRUPT = "Received keyboard interrupt, shutting down..."
    BOT_FATAL_ERROR = "Fatal error: %s"
    BOT_SHUTTING_DOWN = "Shutting down bot..."
    BOT_CONTAINER_SHUTDOWN = "Container shutdown complete"
    BOT_CONTAINER_SHUTDOWN_ERROR = "Error during container shutdown: %s"
    BOT_SHUTDOWN_COMPLETE = "Bot shutdown complete"
    BOT_SHUTDOWN_TIMEOUT = "Graceful shutdown timed out after %.1fs"
    BOT_READY = "Bot ready as %s (%s)"

    # Bot Cog Management
    BOT_COG_LOADED = "Loaded cog: %s"
    BOT_COG_LOAD_FAILED = "Failed to load cog %s: %s"
    BOT_COGS_LOADED_SUMMARY = "Cogs loaded: %s success, %s failed"

    # Bot Command Sync
    BOT_SYNCED_GUILD = "Synced %s commands to guild %s"
    BOT_SYNC_GUILD_FAILED = "Failed to sync to guild %s: %s"

    # Bot Error Handling
    BOT_SLASH_COMMAND_ERROR = "Slash command error in '%s': %s"
    BOT_ERROR_MESSAGE_SEND_FAILED = "Failed to send error message to user"
    COMMAND_FAILED = "Command '%s' failed"


class DiscordUIMessages:
    """User-facing Discord messages and responses.

    These strings are shown directly to users in Discord interactions.
    Keep them concise, friendly, and include appropriate emoji.
    """

    # Generic
    ERROR_NO_PERMISSION = "❌ You do not have permission to use this command."
    ERROR_MANAGER_ROLE_MISSING = "Manager role not configured or not found."
    ERROR_WRONG_CHANNEL = "❌ Voting is only allowed in <#{channel_id}>."
    ERROR_SERVER_ONLY = "❌ This command can only be used in the server."
    ERROR_COMMAND_FAILED = "❌ An error occurred: {error}"
    ERROR_MISSING_ARGUMENT = "Usage: {usage}"
    SUCCESS_GENERIC = "Done."
    ERROR_PERSISTENCE = "❌ Could not save the level list. Nothing was changed, please try again."

    # Accept
    ACCEPT_USAGE = "!accept [thread link or threadID]"
    ACCEPT_ALREADY = "This thread is already accepted."
    ACCEPT_SUCCESS = "✅ **{level_name}** has been accepted."

    # Vote
    VOTE_NO_LEVELS = "There are no pending levels to vote on."
    VOTE_SELECT_PROMPT = "Select a level to vote on:"
    VOTE_SELECT_PLACEHOLDER = "Select a pending level"
    VOTE_MODAL_TITLE = "Vote: {level_name}"
    VOTE_SONG_LABEL = "Song (1-10)"
    VOTE_DESIGN_LABEL = "Design (1-10)"
    VOTE_VIBE_LABEL = "Vibe (1-10)"
    VOTE_SCORE_PLACEHOLDER = "Enter a number from 1 to 10"
    VOTE_INVALID_SCORES = "❌ Scores must be whole numbers from 1 to 10."
    VOTE_ALREADY_VOTED = "❌ You have already voted for this level."
    VOTE_RECORDED = "✅ Your vote for **{level_name}** has been recorded!"
    VOTE_NOT_YOURS = "❌ This menu belongs to someone else. Use /vote to start your own."

    # Level lookup
    LEVEL_NOT_FOUND = "Level not found in pending list."

    # Revote
    REVOTE_USAGE = "!revote [postId]"
    REVOTE_SUCCESS = "Votes for {level_name} have been reset and voters cleared."
    REVOTE_ANNOUNCEMENT = (
        "🔄 Voting for **{level_name}** ({level_id}) has been reset by <@{user_id}>. "
        "Please vote again using /vote!"
    )

    # Remove
    REMOVE_NO_LEVELS = "No levels to remove."
    REMOVE_SELECT_PROMPT = "Select a level to remove:"
    REMOVE_SELECT_PLACEHOLDER = "Select a level to remove"
    REMOVE_MODAL_TITLE = "Remove Level - Reason"
    REMOVE_REASON_LABEL = "Reason for removal"
    REMOVE_REASON_PLACEHOLDER = "Enter the reason for removing this level"
    REMOVE_REASON_REQUIRED = "❌ Please provide a reason for the removal."
    REMOVE_SUCCESS = "✅ Level **{level_name}** has been removed."

    # Ranking
    LIST_EMPTY = "No levels yet."
    LIST_TITLE = "🏆 Voted Levels"
    LIST_FOOTER = "Ranked by overall average · {count} level(s)"
    RANKED_DOC_NOT_CONFIGURED = "GOOGLE_RANKED_DOC_ID need env var."
    RANKED_AUTH_REQUIRED = "Google credentials are required (GOOGLE_SERVICE_ACCOUNT)."
    RANKED_SAVED = "✅ Ranking has been saved!."
    RANKED_SAVE_FAILED = "❌ Google Docs save failed."

    # Announcements
    ANNOUNCE_ACCEPTED_TITLE = "'{level_name}' | has been accepted!"
    ANNOUNCE_ACCEPTED_FOOTER = "Use /vote for This COOL Level!"
    ANNOUNCE_REMOVED_TITLE = "'{level_name}' has been removed"
    ANNOUNCE_REMOVED_DESCRIPTION = "Its. sad"
    ANNOUNCE_REMOVED_FOOTER = "reason : {reason}"
    ANNOUNCE_UNKNOWN_AUTHOR = "Unknown"

    # Say
    SAY_USAGE = (
        '❌ Usage: !say [#channel or channelID] "content" "title(optional)" '
        '"description(optional)" "imageURL(optional)" "color(optional)"'
    )
    SAY_INVALID_CHANNEL = "❌ Provide a valid text channel mention or ID."
    SAY_SEND_FAILED = "❌ Failed to send message."
    SAY_BASE_ROLE_MISSING = 'Base role "{role_name}" not found.'

    # Verification
    VERIFY_GRANTED = "✅ You are now **{stage}**!"
    VERIFY_COMPLETE = "You are already **ultimately verified**. There is nothing left to verify."
    VERIFY_ROLE_MISSING = "❌ The role **{stage}** does not exist on this server."
    VERIFY_ROLE_FORBIDDEN = "❌ I am not allowed to give you the **{stage}** role."
