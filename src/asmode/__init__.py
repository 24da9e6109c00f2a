"""asmode - line classification and indentation core for assembly editing."""

from asmode.core.actions import (
    DelegateToHost,
    DeleteRange,
    EditAction,
    InsertChar,
    InsertNewline,
    InsertString,
    MoveCursorToColumn,
    apply_actions,
)
from asmode.core.config import SessionConfig, load_config
from asmode.core.errors import AsmodeError, ConfigurationFault, MalformedInputFault
from asmode.core.models import (
    Classification,
    CommentConfig,
    CommentStyle,
    LineKind,
    LineReport,
    Span,
    TabStops,
)
from asmode.editing.classifier import LineClassifier, classify
from asmode.editing.comments import CommentStyleResolver
from asmode.editing.indenter import compute_indent, indent_line, layout_line
from asmode.editing.session import EditSession

__version__ = "0.1.0"
