from .config import WriterConfig, DEFAULT_CONFIG
from .model import Statement, TEXT, CDATA, EXPRESSION
from .types import StatementSpec, mk_statement, mk_statements
from .naming import NameAllocator, RNG, RandomRNG
from .registry import DependencyRegistry, SymbolRegistry, MacroDescriptor, ViewDescriptor
from .codegen import BlockBuffer, OutputBlock
from .errors import NoActiveBlockError, ErrorSink, LoggedMessage, LoggingErrorSink, CollectingErrorSink
from .writer import ClassWriter, StatementProcessor
from .processors import ReferenceProcessor, assemble_class, generate

__all__ = [
    # config & model
    "WriterConfig", "DEFAULT_CONFIG", "Statement", "TEXT", "CDATA", "EXPRESSION",
    "StatementSpec", "mk_statement", "mk_statements",
    # building blocks
    "NameAllocator", "RNG", "RandomRNG",
    "DependencyRegistry", "SymbolRegistry", "MacroDescriptor", "ViewDescriptor",
    "BlockBuffer", "OutputBlock",
    # errors
    "NoActiveBlockError", "ErrorSink", "LoggedMessage", "LoggingErrorSink", "CollectingErrorSink",
    # session
    "ClassWriter", "StatementProcessor",
    # reference pipeline
    "ReferenceProcessor", "assemble_class", "generate",
]
