import argparse
import asyncio
import json
import sys
import logging
from typing import Dict, List, Optional

from dotenv import load_dotenv

from anonymous_github.application.anonymizer_service import AnonymizerService
from anonymous_github.domain.exceptions import AnonymousGitHubException
from anonymous_github.domain.models import TreeNode
from anonymous_github.domain.tree import fold_to_hierarchy
from anonymous_github.infrastructure.config_seal import ConfigSeal
from anonymous_github.infrastructure.github_client import GitHubRestClient
from anonymous_github.infrastructure.settings import load_github_token

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s",
    handlers=[
        logging.StreamHandler(sys.stderr)
    ]
)
logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="anonymous-github",
        description="Share a GitHub repository behind an opaque link with identifying terms removed.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    seal = sub.add_parser("seal", help="Validate a repository and print a share token")
    seal.add_argument("repo", help="Repository in owner/name form")
    seal.add_argument("--branch", default="main", help="Branch to publish (default: main)")
    seal.add_argument("--term", action="append", default=[], dest="terms", help="Term to anonymize (repeatable)")
    seal.add_argument("--terms-file", help="File with one term per line")

    unseal = sub.add_parser("unseal", help="Print the configuration sealed in a token")
    unseal.add_argument("token")

    ls = sub.add_parser("ls", help="Print the file tree behind a token")
    ls.add_argument("token")

    cat = sub.add_parser("cat", help="Print an anonymized file behind a token")
    cat.add_argument("token")
    cat.add_argument("path")

    return parser


def render_tree(nodes: Dict[str, TreeNode], depth: int = 0) -> List[str]:
    lines = []
    for node in nodes.values():
        suffix = "/" if node.is_dir else ""
        lines.append(f"{'  ' * depth}{node.name}{suffix}")
        lines.extend(render_tree(node.children, depth + 1))
    return lines


async def run(args: argparse.Namespace, service: AnonymizerService) -> None:
    if args.command == "seal":
        terms = list(args.terms)
        if args.terms_file:
            with open(args.terms_file, "r", encoding="utf-8") as fh:
                terms.extend(fh.read().split("\n"))
        result = await service.create_link(args.repo, args.branch, terms)
        print(service.share_path(result.token))

    elif args.command == "unseal":
        config = service.open(args.token)
        print(json.dumps(config.model_dump(), indent=2))

    elif args.command == "ls":
        listing = await service.list_files(args.token)
        print("\n".join(render_tree(fold_to_hierarchy(listing.entries))))

    elif args.command == "cat":
        anonymized = await service.get_file(args.token, args.path)
        print(anonymized.content)


def main(argv: Optional[List[str]] = None) -> int:
    # Load environment variables from .env file
    load_dotenv()

    args = build_parser().parse_args(argv)
    service = AnonymizerService(
        github_client=GitHubRestClient(token=load_github_token()),
        config_seal=ConfigSeal(),
    )

    try:
        asyncio.run(run(args, service))
    except AnonymousGitHubException as e:
        logger.error(str(e))
        return 1
    except KeyboardInterrupt:
        logger.info("Interrupted by user. Exiting.")
        return 130
    return 0


if __name__ == "__main__":
    sys.exit(main())
