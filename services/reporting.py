from __future__ import annotations

from typing import Optional

from pipelines.runner import RunContext


def print_summary(ctx: RunContext, output_dir: Optional[str] = None) -> None:
    """Print summary of the build run."""
    meta = ctx.meta

    print("\n" + "="*60)
    print("DIRECTORY SITE BUILD - SUMMARY")
    print("="*60)
    print(f"Source: {meta.get('source_name', 'N/A')}")
    print(f"Build Date: {meta.get('build_date', 'N/A')}")
    print()
    print("Entities:")
    print(f"  Loaded: {meta.get('entities_loaded', 0)}")
    print(f"  Published: {meta.get('entities_published', 0)}")
    print(f"  Skipped (inactive): {meta.get('entities_skipped', 0)}")
    print()
    print(f"Documents Rendered: {meta.get('documents_rendered', 0)}")
    print(f"Documents Written: {meta.get('documents_written', 0)}")
    if ctx.notifications:
        print()
        print("Notification:")
        for result in ctx.notifications:
            code = result.status_code if result.status_code is not None else "-"
            print(f"  {result.target}: {result.outcome} (status={code})")
    elif "notify_skipped" in meta:
        print()
        print(f"Notification: skipped ({meta['notify_skipped']})")
    if output_dir:
        print(f"Output Directory: {output_dir}")
    print("="*60)
