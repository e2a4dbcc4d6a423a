# Path: fin_extract/ixbrl/document_parser.py
"""
iXBRL Document Parser

Single entry point over the scanning stages:
    detect -> contexts -> facts -> metadata

Facts whose contextRef names no parsed context are dropped (and
recorded), never attached to a default context. A stage that raises
is recorded as STAGE_FAILED and the remaining stages still run on
whatever the earlier ones produced.

Example:
    document = parse_ixbrl(html_text)
    if document.has_xbrl:
        print(f"{document.fact_count} facts, {document.context_count} contexts")
"""

from dataclasses import dataclass, field
from typing import Optional

from core.logger.ipo_logging import get_input_logger
from .detector import detect_ixbrl
from .context_parser import ContextParser, Context
from .fact_parser import FactParser, Fact
from .metadata_extractor import MetadataExtractor, DocumentMetadata
from .parse_errors import ParseError, ErrorSeverity, ErrorCategory


@dataclass
class ParsedDocument:
    """Everything the scanning stages read from one document."""
    has_xbrl: bool = False
    contexts: dict[str, Context] = field(default_factory=dict)
    facts: list[Fact] = field(default_factory=list)
    metadata: DocumentMetadata = field(default_factory=DocumentMetadata)
    parse_errors: list[ParseError] = field(default_factory=list)
    dropped_fact_count: int = 0

    @property
    def fact_count(self) -> int:
        return len(self.facts)

    @property
    def context_count(self) -> int:
        return len(self.contexts)

    @property
    def error_count(self) -> int:
        return len(self.parse_errors)


class DocumentParser:
    """Runs the scanning stages over one document."""

    def __init__(self):
        self.logger = get_input_logger('document_parser')

    def parse(self, content: str) -> ParsedDocument:
        """
        Parse an iXBRL document.

        Args:
            content: Full document text

        Returns:
            ParsedDocument (has_xbrl False and empty when not iXBRL)
        """
        document = ParsedDocument()
        if not detect_ixbrl(content):
            self.logger.info("No inline XBRL markers found")
            return document
        document.has_xbrl = True

        context_parser = ContextParser()
        contexts = self._run_stage('contexts', document, context_parser.parse, content)
        document.parse_errors.extend(context_parser.errors)
        document.contexts = contexts or {}

        fact_parser = FactParser()
        facts = self._run_stage('facts', document, fact_parser.parse, content)
        document.parse_errors.extend(fact_parser.errors)
        document.facts = self._attach_known_contexts(facts or [], document)

        metadata = self._run_stage(
            'metadata', document, MetadataExtractor().extract, content, document.contexts,
        )
        if metadata is not None:
            document.metadata = metadata

        self.logger.info(
            f"Document parsed: {document.fact_count} facts, "
            f"{document.context_count} contexts, "
            f"{document.dropped_fact_count} facts dropped, "
            f"{document.error_count} parse errors"
        )
        return document

    def _attach_known_contexts(
        self,
        facts: list[Fact],
        document: ParsedDocument
    ) -> list[Fact]:
        """Keep facts whose context exists, record the rest."""
        kept = []
        for fact in facts:
            if fact.context_ref in document.contexts:
                kept.append(fact)
                continue
            document.dropped_fact_count += 1
            document.parse_errors.append(ParseError(
                ErrorSeverity.ERROR,
                ErrorCategory.MISSING_CONTEXT,
                f"Fact {fact.concept} references unknown context {fact.context_ref}",
                fact.fact_id or fact.concept,
            ))
        if document.dropped_fact_count:
            self.logger.warning(
                f"Dropped {document.dropped_fact_count} facts with unknown contexts"
            )
        return kept

    def _run_stage(self, stage: str, document: ParsedDocument, func, *args):
        """Run one stage; a failure is recorded and yields None."""
        try:
            return func(*args)
        except Exception as e:
            self.logger.error(f"Stage '{stage}' failed: {e}", exc_info=True)
            document.parse_errors.append(ParseError(
                ErrorSeverity.ERROR,
                ErrorCategory.STAGE_FAILED,
                f"Stage '{stage}' failed: {e}",
            ))
            return None


def parse_ixbrl(content: str) -> ParsedDocument:
    """Parse an iXBRL document with a fresh DocumentParser."""
    return DocumentParser().parse(content)


__all__ = ['DocumentParser', 'ParsedDocument', 'parse_ixbrl']
