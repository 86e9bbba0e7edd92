"""
Command-line entry point.

Commands:
- generate {problems,users,recommends} [--save-dir DIR]
- post {problems,users,recommends} [--path DIR] [--optimize] [--truncate]
- server [--host HOST] [--port N]

Dependencies: argparse (stdlib), atcoder_search.application.services
System role: Process wiring for indexing and serving
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from atcoder_search.application.services import DOMAINS, DocumentUploader, create_generator
from atcoder_search.boundary.db import get_async_engine, get_async_session_factory
from atcoder_search.boundary.solr import StandaloneSolrCore
from atcoder_search.configs import Settings, get_settings
from atcoder_search.core.exceptions import AtCoderSearchException
from atcoder_search.observability.logger import configure_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="atcoder_search",
        description="Index AtCoder problems and users into Solr and serve searches",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    generate = commands.add_parser("generate", help="Generate documents from the database")
    generate.add_argument("domain", choices=DOMAINS)
    generate.add_argument("--save-dir", type=Path, default=None, help="Output directory")

    post = commands.add_parser("post", help="Post generated documents to Solr")
    post.add_argument("domain", choices=DOMAINS)
    post.add_argument("--path", type=Path, default=None, help="Directory holding documents")
    post.add_argument("--optimize", action="store_true", help="Optimize instead of commit")
    post.add_argument("--truncate", action="store_true", help="Delete existing documents first")

    server = commands.add_parser("server", help="Run the search API")
    server.add_argument("--host", default=None)
    server.add_argument("--port", type=int, default=None)

    return parser


async def run_generate(settings: Settings, domain: str, save_dir: Path | None) -> int:
    engine = get_async_engine()
    try:
        generator = create_generator(
            domain, get_async_session_factory(engine), settings, save_dir=save_dir
        )
        return await generator.run()
    finally:
        await engine.dispose()


async def run_post(
    settings: Settings,
    domain: str,
    path: Path | None,
    optimize: bool,
    truncate: bool,
) -> int:
    engine = settings.search_engine
    async with StandaloneSolrCore(
        engine.core_name(domain),
        engine.host,
        timeout=engine.timeout,
        max_retries=engine.max_retries,
    ) as core:
        uploader = DocumentUploader(core)
        return await uploader.post_documents(
            path or settings.generation.domain_directory(domain),
            prefix=settings.generation.file_prefix,
            optimize=optimize,
            truncate=truncate,
        )


def main(argv: list[str] | None = None) -> int:
    """
    Run a command.

    Returns:
        int: Process exit code
    """
    args = build_parser().parse_args(argv)
    settings = get_settings()
    configure_logging(settings.log_level)

    if args.command == "server":
        from atcoder_search.api.main import run

        run(host=args.host, port=args.port)
        return 0

    try:
        if args.command == "generate":
            asyncio.run(run_generate(settings, args.domain, args.save_dir))
        else:
            asyncio.run(
                run_post(settings, args.domain, args.path, args.optimize, args.truncate)
            )
    except AtCoderSearchException as e:
        logger.error(f"{__name__}:main - {args.command} {args.domain} failed: {e}")
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
