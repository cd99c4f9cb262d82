import argparse
import dataclasses
import logging
import os
import sys
import uuid as _uuid
from datetime import date

from config.settings import Settings, get_settings
from pipelines.build_site import resolve_site_url, run_build
from pipelines.runner import Pipeline, RunContext
from pipelines.steps import LoadEntities, NotifyIndexers
from services.indexing import IndexingClient
from services.pages import render_detail_page
from services.reporting import print_summary
from sources import CatalogError, available_sources, get_source
from utils.logging_setup import init_logging


logger = logging.getLogger("cli")


def _settings_from_args(args) -> Settings:
	settings = get_settings()
	overrides = {}
	if getattr(args, "output", None):
		overrides["output_dir"] = args.output
	if getattr(args, "data", None):
		overrides["data_path"] = args.data
	if getattr(args, "source", None):
		overrides["catalog_source"] = args.source
	if getattr(args, "all_statuses", False):
		overrides["active_only"] = False
	if getattr(args, "build_date", None):
		overrides["build_date"] = args.build_date
	return dataclasses.replace(settings, **overrides) if overrides else settings


def _resolve_source(name: str):
	try:
		return get_source(name)
	except KeyError as e:
		raise CatalogError(f"Unknown catalog source '{name}' (available: {', '.join(sorted(available_sources()))})") from e


def cmd_build(args):
	settings = _settings_from_args(args)
	_resolve_source(settings.catalog_source)
	ctx = run_build(settings, notify=args.notify)
	print_summary(ctx, settings.output_dir)


def cmd_notify(args):
	settings = _settings_from_args(args)
	settings = resolve_site_url(settings, _resolve_source(settings.catalog_source), settings.data_path)
	ctx = Pipeline([NotifyIndexers(IndexingClient(settings), settings)]).run(RunContext())
	print_summary(ctx, settings.output_dir)


def cmd_page(args):
	settings = _settings_from_args(args)
	source = _resolve_source(settings.catalog_source)
	settings = resolve_site_url(settings, source, settings.data_path)
	ctx = LoadEntities(source, settings.data_path).run(RunContext())
	matches = [e for e in ctx.entities if e.id == args.id and (not args.kind or e.kind == args.kind)]
	if not matches:
		raise CatalogError(f"No entity with id '{args.id}' in {settings.data_path}")
	if len(matches) > 1:
		raise CatalogError(f"Id '{args.id}' exists in several collections; pass --kind")
	sys.stdout.write(render_detail_page(matches[0], settings))


def cmd_sources(args):
	for name in sorted(available_sources()):
		print(name)


def _iso_date(value: str) -> str:
	try:
		return date.fromisoformat(value).isoformat()
	except ValueError:
		raise argparse.ArgumentTypeError(f"not a YYYY-MM-DD date: {value}")


def main():
	try:
		settings = get_settings()
	except ValueError as e:
		init_logging(os.getenv("LOG_LEVEL") or "INFO")
		logger.error(f"Invalid configuration: {e}", extra={"step": "config", "status": "failed"})
		sys.exit(1)
	init_logging(settings.log_level)
	if not os.getenv("RUN_ID"):
		os.environ["RUN_ID"] = _uuid.uuid4().hex
	parser = argparse.ArgumentParser(description="Directory site builder")
	sub = parser.add_subparsers(dest="cmd", required=True)

	p_build = sub.add_parser("build", help="Render and publish the directory site")
	p_build.add_argument("--data", help="Path to the catalog file (default from settings)")
	p_build.add_argument("--source", help="Catalog source name (default from settings)")
	p_build.add_argument("--output", help="Output directory (default from settings)")
	p_build.add_argument("--build-date", type=_iso_date, help="Override the build date (YYYY-MM-DD)")
	p_build.add_argument("--all-statuses", action="store_true", help="Publish inactive entities too")
	p_build.add_argument("--notify", action="store_true", help="Submit published URLs to indexing services")
	p_build.set_defaults(func=cmd_build)

	p_notify = sub.add_parser("notify", help="Submit URLs from an existing sitemap to indexing services")
	p_notify.add_argument("--output", help="Output directory holding sitemap.xml")
	p_notify.set_defaults(func=cmd_notify)

	p_page = sub.add_parser("page", help="Print one entity's detail page, regardless of status")
	p_page.add_argument("--id", required=True, help="Entity id")
	p_page.add_argument("--kind", choices=["business", "freelancer"], help="Entity kind when ids collide")
	p_page.add_argument("--data", help="Path to the catalog file (default from settings)")
	p_page.add_argument("--source", help="Catalog source name (default from settings)")
	p_page.add_argument("--build-date", type=_iso_date, help="Override the build date (YYYY-MM-DD)")
	p_page.set_defaults(func=cmd_page)

	p_src = sub.add_parser("sources", help="List available catalog sources")
	p_src.set_defaults(func=cmd_sources)

	args = parser.parse_args()
	try:
		args.func(args)
	except CatalogError as e:
		logger.error(str(e), extra={"step": args.cmd, "status": "failed"})
		sys.exit(1)


if __name__ == "__main__":
	main()
