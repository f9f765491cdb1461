from .chapter import BookSummary, ChapterCreate, ChapterDetail, ChapterOut, ChapterUpdate
from .common import (
    GENRES,
    AuthorSummary,
    CamelModel,
    DataEnvelope,
    DiscussionVisibility,
    SharingVisibility,
    Visibility,
    dump,
)
from .discussion import (
    CommentCreate,
    CommentOut,
    CommentThread,
    CommentUpdate,
    DiscussionCreate,
    DiscussionOut,
    DiscussionUpdate,
)
from .library import (
    BlogCreate,
    BlogOut,
    BlogUpdate,
    CollectionBook,
    CollectionCreate,
    CollectionOut,
    CollectionUpdate,
    ReadingListCreate,
    ReadingListItemOut,
    ReadingListUpdate,
    ReadingStatus,
)
from .report import (
    Pagination,
    ReportCreate,
    ReportOut,
    ReportReason,
    ReportStatus,
    ReportSubmitted,
    ReportType,
)
from .user import SignupRequest, UserOut
from .user_book import (
    ChapterSummary,
    UserBookCreate,
    UserBookDetail,
    UserBookListItem,
    UserBookOut,
    UserBookUpdate,
)

__all__ = [
    "GENRES",
    "AuthorSummary",
    "BlogCreate",
    "BlogOut",
    "BlogUpdate",
    "BookSummary",
    "CamelModel",
    "ChapterCreate",
    "ChapterDetail",
    "ChapterOut",
    "ChapterSummary",
    "ChapterUpdate",
    "CollectionBook",
    "CollectionCreate",
    "CollectionOut",
    "CollectionUpdate",
    "CommentCreate",
    "CommentOut",
    "CommentThread",
    "CommentUpdate",
    "DataEnvelope",
    "DiscussionCreate",
    "DiscussionOut",
    "DiscussionUpdate",
    "DiscussionVisibility",
    "Pagination",
    "ReadingListCreate",
    "ReadingListItemOut",
    "ReadingListUpdate",
    "ReadingStatus",
    "ReportCreate",
    "ReportOut",
    "ReportReason",
    "ReportStatus",
    "ReportSubmitted",
    "ReportType",
    "SharingVisibility",
    "SignupRequest",
    "UserBookCreate",
    "UserBookDetail",
    "UserBookListItem",
    "UserBookOut",
    "UserBookUpdate",
    "UserOut",
    "Visibility",
    "dump",
]
