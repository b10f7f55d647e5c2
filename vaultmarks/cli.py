from __future__ import annotations

import argparse
from pathlib import Path
from typing import Dict, List

from . import __version__
from .config import load_settings
from .log import LogConfig, get_logger, setup_logging
from .model import FsEntry
from .service import BookmarkOrderService
from .store import BookmarkFileError, open_vault_host

log = get_logger(__name__)


def main(argv: List[str] | None = None) -> int:
    p = argparse.ArgumentParser(
        prog="vaultmarks",
        description="Bookmark order lookups and idempotent bookmarking for a notes vault.",
    )
    p.add_argument("-V", "--version", action="version", version=f"vaultmarks {__version__}")
    p.add_argument("--config", default=None, help="YAML config file (optional). Env vars override defaults.")
    p.add_argument("--vault", default=".", help="Vault root directory (default: current directory).")
    p.add_argument("--bookmarks", default=None, help="Bookmarks JSON, relative to the vault (overrides env/config).")
    p.add_argument("--log-level", default=None, help="DEBUG/INFO/WARN/ERROR (overrides env/config).")
    p.add_argument("--no-color", action="store_true", help="Disable colored logging.")
    sub = p.add_subparsers(dest="cmd", required=True)

    rk = sub.add_parser("rank", help="Print the one-based bookmark position of vault paths.")
    rk.add_argument("paths", nargs="+", help="Vault-relative paths (group paths for groups).")
    rk.add_argument("--group", default=None, help="Only consider this top-level bookmark group.")

    ls = sub.add_parser("list", help="List bookmarked items in order.")
    ls.add_argument("--group", default=None, help="Only consider this top-level bookmark group.")

    add = sub.add_parser("add", help="Bookmark vault files/folders, mirroring their folder hierarchy as groups.")
    add.add_argument("paths", nargs="+", help="Vault-relative paths to bookmark.")
    add.add_argument("--group", default=None, help="Create the hierarchy under this top-level group.")
    add.add_argument("--dry-run", action="store_true", help="Compute changes but do not write the bookmarks file.")

    args = p.parse_args(argv)
    cfg = load_settings(args.config)
    if args.log_level:
        cfg.log_level = args.log_level
    if args.no_color:
        cfg.no_color = True
    if args.bookmarks:
        cfg.bookmarks_file = args.bookmarks
    setup_logging(LogConfig(level=cfg.log_level, no_color=cfg.no_color))

    vault = Path(args.vault)
    try:
        host = open_vault_host(vault, cfg.bookmarks_file)
    except BookmarkFileError as e:
        log.error("%s", e)
        return 2
    service = BookmarkOrderService(host, settings=cfg)

    if args.cmd == "rank":
        return _cmd_rank(service, args)
    if args.cmd == "list":
        return _cmd_list(service, args)
    if args.cmd == "add":
        return _cmd_add(service, vault, args)
    return 2


def _cmd_rank(service: BookmarkOrderService, args) -> int:
    for path in args.paths:
        rank = service.rank(_vault_path(path), args.group)
        print(f"{rank if rank else '-'}\t{path}")
    return 0


def _cmd_list(service: BookmarkOrderService, args) -> int:
    for entry in service.ordered(args.group):
        print(f"{entry.order + 1}\t{_kind(entry.file, entry.folder, entry.group)}\t{entry.path}")
    return 0


def _cmd_add(service: BookmarkOrderService, vault: Path, args) -> int:
    by_parent: Dict[str, List[FsEntry]] = {}
    for raw in args.paths:
        rel = _vault_path(raw)
        if ".." in rel.split("/"):
            log.error("Path leaves the vault: %s", raw)
            return 2
        target = vault / rel
        if not rel or not target.exists():
            log.error("Not found in vault: %s", raw)
            return 2
        parent = rel.rsplit("/", 1)[0] if "/" in rel else ""
        by_parent.setdefault(parent, []).append(FsEntry(path=rel, is_directory=target.is_dir()))

    added = 0
    for siblings in by_parent.values():
        added += service.ensure_bookmarked(siblings, args.group, persist=not args.dry_run)
    if args.dry_run:
        log.info("Dry run: bookmarks file not written.")
    print(f"added\t{added}")
    return 0


def _vault_path(raw: str) -> str:
    return raw.replace("\\", "/").strip("/")


def _kind(file: bool, folder: bool, group: bool) -> str:
    if group:
        return "group"
    if folder:
        return "folder"
    return "file" if file else "?"
