"""
Webmail constants
"""

# database alias of the mail server's mailbox directory
VMAIL_DB_ALIAS = "vmail"

# folders
FOLDER_INBOX = "INBOX"
FOLDER_SENT = "Sent"
FOLDER_DRAFTS = "Drafts"
FOLDER_TRASH = "Trash"
FOLDER_JUNK = "Junk"

# returned when the maildir cannot be read
FALLBACK_FOLDERS = (FOLDER_INBOX, FOLDER_SENT, FOLDER_DRAFTS, FOLDER_TRASH, FOLDER_JUNK)

FOLDER_DISPLAY_NAMES = {
    FOLDER_INBOX: "Inbox",
    FOLDER_JUNK: "Spam",
}

# maildir layout
MAILDIR_CUR = "cur"
MAILDIR_NEW = "new"
MAILDIR_TMP = "tmp"
MAILDIR_FOLDER_PREFIX = "."
MAILDIR_FLAGS_DELIMITER = ":2,"

# maildir flag letters
FLAG_SEEN = "S"
FLAG_FLAGGED = "F"

# message parsing
SNIPPET_LENGTH = 100

# listing
LIMIT_EMAILS_DEFAULT = 50
