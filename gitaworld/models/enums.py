# gitaworld/models/enums.py
import enum

import sqlalchemy as sa


class Visibility(str, enum.Enum):
    """Publication exposure of a chapter or verse."""

    DRAFT = "draft"
    HIDDEN = "hidden"
    PUBLISHED = "published"


class VerseStatus(str, enum.Enum):
    """Production pipeline stage of a verse. Independent of visibility."""

    PENDING = "pending"
    UPLOADED = "uploaded"
    PROCESSING = "processing"
    PUBLISHED = "published"


class Role(str, enum.Enum):
    VIEWER = "viewer"
    EDITOR = "editor"
    ADMIN = "admin"


# Capability rank: a role passes every check at or below its own rank.
ROLE_RANK = {Role.VIEWER: 0, Role.EDITOR: 1, Role.ADMIN: 2}


def toggled_visibility(current: Visibility) -> Visibility:
    """
    One-click flip between the two non-draft states.
    Drafts are only promoted through an explicit edit.
    """
    if current == Visibility.PUBLISHED:
        return Visibility.HIDDEN
    if current == Visibility.HIDDEN:
        return Visibility.PUBLISHED
    raise ValueError("Draft content must be published from the edit form.")


def enum_column_type(enum_cls, name: str) -> sa.Enum:
    # Persist the lower-case values ("published"), not the member names.
    return sa.Enum(
        enum_cls,
        name=name,
        values_callable=lambda members: [m.value for m in members],
        validate_strings=True,
    )


VISIBILITY_TYPE = enum_column_type(Visibility, "visibility_status")
VERSE_STATUS_TYPE = enum_column_type(VerseStatus, "verse_status")
ROLE_TYPE = enum_column_type(Role, "user_role")
