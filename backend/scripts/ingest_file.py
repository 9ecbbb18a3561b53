"""Ingest a local PDF or text file into the knowledge base.

Runs the same pipeline as ``POST /api/v1/kb/ingest``:

    python scripts/ingest_file.py --file guide.pdf --title "Creator Guide" --source handbook
"""

import argparse
import asyncio
import mimetypes
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from creator_kb.infrastructure.config.settings import get_settings  # noqa: E402
from creator_kb.infrastructure.database.session import create_tables, local_session  # noqa: E402
from creator_kb.infrastructure.embedding import get_embedding_service  # noqa: E402
from creator_kb.infrastructure.logging import get_logger  # noqa: E402
from creator_kb.modules.common.exceptions import DomainError  # noqa: E402
from creator_kb.modules.ingestion import IngestionService, UploadedFile  # noqa: E402

logger = get_logger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Ingest a document into the creator knowledge base")
    parser.add_argument("--file", required=True, type=Path, help="Path to a PDF or UTF-8 text file")
    parser.add_argument("--title", required=True, help="Document title")
    parser.add_argument("--source", default=None, help="Optional source label")
    parser.add_argument("--media-type", default=None, help="Override the detected media type")
    parser.add_argument("--create-tables", action="store_true", help="Create tables before ingesting")
    return parser


async def main(args: argparse.Namespace) -> int:
    """Ingest one file and print the resulting document id."""
    path: Path = args.file
    if not path.is_file():
        logger.error(f"File not found: {path}")
        return 1

    media_type = args.media_type or mimetypes.guess_type(path.name)[0] or ""
    upload = UploadedFile(data=path.read_bytes(), filename=path.name, media_type=media_type)

    if args.create_tables:
        await create_tables()

    service = IngestionService(embedding_provider=get_embedding_service(), settings=get_settings())

    async with local_session() as db:
        try:
            result = await service.ingest(upload, title=args.title, source=args.source, db=db)
        except DomainError as e:
            logger.error(f"Ingestion failed ({e.kind}): {e}")
            return 1

    print(f"document_id={result.document_id} chunks_inserted={result.chunks_inserted}")
    return 0


if __name__ == "__main__":
    sys.exit(asyncio.run(main(_build_parser().parse_args())))
