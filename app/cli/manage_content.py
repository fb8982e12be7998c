#!/usr/bin/env python3
"""
CLI tool to inspect the knowledge base catalog.

Most useful with the SQL backend, where the catalog outlives the process.
With the default in-memory backend it shows the freshly seeded catalog.

Usage:
    python -m app.cli.manage_content domains
    python -m app.cli.manage_content articles --domain embedded-systems
    python -m app.cli.manage_content search "cortex"
    python -m app.cli.manage_content stats

Examples:
    # Stats for a SQLite-backed catalog
    STORAGE_BACKEND=sql DATABASE_URL=sqlite+aiosqlite:///./knowledge_base.db \\
        python -m app.cli.manage_content stats
"""
import asyncio
import argparse
import sys

from app.config import settings
from app.core.interfaces import IStorage
from app.repositories import create_storage


async def show_domains(storage: IStorage):
    domains = await storage.get_domains()

    print(f"\n{len(domains)} domain(s):\n")
    print(f"{'ID':<28} {'Name':<28} {'Progress':>8} {'Articles':>9} {'Projects':>9}")
    print("-" * 86)
    for domain in domains:
        print(
            f"{domain.id:<28} {domain.name:<28} {domain.progress:>7}% "
            f"{domain.articles_count:>9} {domain.projects_count:>9}"
        )


async def show_articles(storage: IStorage, domain_id: str = None):
    articles = await storage.get_articles(domain_id)

    scope = f" in {domain_id}" if domain_id else ""
    print(f"\n{len(articles)} article(s){scope}:\n")
    for article in articles:
        tags = f" [{', '.join(article.tags)}]" if article.tags else ""
        print(f"  {article.id}  {article.status:<12} {article.title}{tags}")


async def search_articles(storage: IStorage, query: str):
    if not query:
        print("[ERROR] Search query is required")
        return

    articles = await storage.search_articles(query)
    print(f"\n{len(articles)} article(s) matching '{query}':\n")
    for article in articles:
        print(f"  {article.id}  {article.title}")


async def show_stats(storage: IStorage):
    stats = await storage.get_stats()

    print("\nKnowledge base stats:")
    print(f"  Domains:       {stats.total_domains}")
    print(f"  Articles:      {stats.total_articles}")
    print(f"  Projects:      {stats.total_projects}")
    print(f"  Hours learned: {stats.hours_learned}")


async def run(command, storage: IStorage = None):
    """Open storage, run one command, close storage."""
    storage = storage or create_storage(settings)
    await storage.initialize()
    try:
        await command(storage)
    finally:
        await storage.close()


def main():
    parser = argparse.ArgumentParser(
        description='Inspect the knowledge base catalog',
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    subparsers = parser.add_subparsers(dest='command', help='Command to execute')

    subparsers.add_parser('domains', help='List domains')

    articles_parser = subparsers.add_parser('articles', help='List articles')
    articles_parser.add_argument('--domain', help='Only articles of this domain ID')

    search_parser = subparsers.add_parser('search', help='Search article title, content and tags')
    search_parser.add_argument('query', help='Case-insensitive text to find')

    subparsers.add_parser('stats', help='Show summary counts')

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    # Execute command
    if args.command == 'domains':
        asyncio.run(run(show_domains))
    elif args.command == 'articles':
        asyncio.run(run(lambda storage: show_articles(storage, args.domain)))
    elif args.command == 'search':
        asyncio.run(run(lambda storage: search_articles(storage, args.query)))
    elif args.command == 'stats':
        asyncio.run(run(show_stats))


if __name__ == '__main__':
    main()
