"""SQLAlchemy table definitions for CourseLoop.

The hosted backend serves these tables over PostgREST; the definitions
here create the schema and back the direct-SQL maintenance jobs. Column
types are portable so the jobs can also run against SQLite in tests.
"""

from sqlalchemy import (
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    UniqueConstraint,
    Uuid,
    func,
)

metadata = MetaData()

# ============================================================================
# PROFILES TABLE (1:1 with auth users, keyed by the auth user id)
# ============================================================================
profiles_table = Table(
    "profiles",
    metadata,
    Column("id", Uuid, primary_key=True),
    Column("username", String(20), nullable=True),
    Column("email", String(255), nullable=True),
    Column("full_name", String(200), nullable=True),
    Column("avatar_url", Text, nullable=True),
    Column("university", String(200), nullable=True),
    Column(
        "created_at", DateTime(timezone=True), nullable=False, server_default=func.now()
    ),
    UniqueConstraint("username", name="profiles_username_key"),
)

# ============================================================================
# COURSES TABLE (one row per normalized code + professor)
# ============================================================================
courses_table = Table(
    "courses",
    metadata,
    Column("id", Uuid, primary_key=True),
    Column("course_code", String(20), nullable=False),
    Column("professor_name", String(100), nullable=False),
    UniqueConstraint(
        "course_code", "professor_name", name="courses_course_code_professor_name_key"
    ),
)

# ============================================================================
# USER_COURSES TABLE (enrollment links)
# ============================================================================
user_courses_table = Table(
    "user_courses",
    metadata,
    Column(
        "user_id",
        Uuid,
        ForeignKey("profiles.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "course_id",
        Uuid,
        ForeignKey("courses.id", ondelete="CASCADE"),
        primary_key=True,
    ),
)

# ============================================================================
# POSTS TABLE
# ============================================================================
posts_table = Table(
    "posts",
    metadata,
    Column("id", Uuid, primary_key=True),
    Column("user_id", Uuid, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False),
    Column("username", String(20), nullable=True),
    Column("content", Text, nullable=False),
    Column("course_code", String(20), nullable=False),
    Column("like_count", Integer, nullable=False, server_default="0"),
    Column("comment_count", Integer, nullable=False, server_default="0"),
    Column(
        "created_at", DateTime(timezone=True), nullable=False, server_default=func.now()
    ),
    CheckConstraint("like_count >= 0", name="posts_like_count_nonnegative"),
    CheckConstraint("comment_count >= 0", name="posts_comment_count_nonnegative"),
)

Index("idx_posts_course_code", posts_table.c.course_code)
Index("idx_posts_created_at", posts_table.c.created_at)

# ============================================================================
# COMMENTS TABLE
# ============================================================================
comments_table = Table(
    "comments",
    metadata,
    Column("id", Uuid, primary_key=True),
    Column("post_id", Uuid, ForeignKey("posts.id", ondelete="CASCADE"), nullable=False),
    Column("user_id", Uuid, ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False),
    Column("username", String(20), nullable=True),
    Column("content", Text, nullable=False),
    Column("like_count", Integer, nullable=False, server_default="0"),
    Column(
        "created_at", DateTime(timezone=True), nullable=False, server_default=func.now()
    ),
    CheckConstraint("like_count >= 0", name="comments_like_count_nonnegative"),
)

Index("idx_comments_post_id", comments_table.c.post_id)
