# admin.py
"""Device-side admin commands for the project store.

Runs against the local store file on this machine and the site's cloud API,
the same way the admin dashboard does in a browser.
"""
import argparse
import asyncio
import json
import sys

from config import configure_logging, load_settings
from errors import CloudStoreError
from models.project import order_key
from storage.cloud import CloudProjectsClient
from storage.local_store import JsonFileLocalStore
from storage.reconciler import ProjectReconciler


def build_parser() -> argparse.ArgumentParser:
    settings = load_settings()
    parser = argparse.ArgumentParser(prog="studio-admin", description="Manage portfolio projects.")
    parser.add_argument("--local-store", default=str(settings.local_store_path), help="Local store file.")
    parser.add_argument("--api-url", default=settings.cloud_api_url, help="Base URL of the site serving /api/projects.")
    parser.add_argument("--json", action="store_true", help="Print raw JSON.")

    sub = parser.add_subparsers(dest="cmd", required=True)
    sub.add_parser("list", help="List merged local + cloud projects.")
    p = sub.add_parser("featured", help="List featured projects (default catalog when none).")
    p.add_argument("--include-test", action="store_true", help="Keep projects with 'test' in the title.")
    sub.add_parser("migrate", help="Move local projects to cloud storage, then clear local storage.")
    p = sub.add_parser("toggle-featured", help="Flip the featured flag of a local project.")
    p.add_argument("project_id")
    sub.add_parser("clear-samples", help="Remove sample/placeholder entries from local storage.")
    sub.add_parser("force-sync", help="Clear local storage so projects load from cloud only.")
    sub.add_parser("status", help="Show local and cloud storage status.")

    p = sub.add_parser("add", help="Create a project (local storage unless --cloud).")
    p.add_argument("--title", required=True)
    p.add_argument("--slug")
    p.add_argument("--category", default="")
    p.add_argument("--description", default="")
    p.add_argument("--thumbnail", dest="thumbnail_url", default="", help="Thumbnail URL (e.g. from /api/upload).")
    p.add_argument("--image", dest="image_urls", action="append", default=[], help="Gallery image URL; repeatable.")
    p.add_argument("--order", type=int, default=0)
    p.add_argument("--featured", action="store_true")
    p.add_argument("--cloud", action="store_true", help="Write to cloud storage instead of local storage.")

    p = sub.add_parser("edit", help="Change fields of a project.")
    p.add_argument("project_id")
    p.add_argument(
        "--set", dest="fields", action="append", default=[], metavar="KEY=VALUE",
        help="Field to change; VALUE is parsed as JSON when possible. Repeatable.",
    )
    p.add_argument("--cloud", action="store_true")

    p = sub.add_parser("delete", help="Delete a project.")
    p.add_argument("project_id")
    p.add_argument("--cloud", action="store_true")

    p = sub.add_parser("clear-cloud", help="Delete every project in cloud storage.")
    p.add_argument("--yes", action="store_true", help="Confirm the deletion.")
    return parser


def parse_fields(pairs: list[str]) -> dict:
    fields = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise ValueError(f"expected KEY=VALUE, got {pair!r}")
        try:
            fields[key] = json.loads(value)
        except ValueError:
            fields[key] = value
    return fields


def _project_from_args(args) -> dict:
    project = {
        "title": args.title,
        "category": args.category,
        "description": args.description,
        "thumbnailUrl": args.thumbnail_url,
        "imageUrls": args.image_urls,
        "featured": args.featured,
        "order": args.order,
    }
    if args.slug:
        project["slug"] = args.slug
    return project


def _print_projects(projects: list[dict], as_json: bool):
    if as_json:
        print(json.dumps(projects, indent=2, ensure_ascii=False))
        return
    for p in projects:
        star = "*" if p.get("featured") else " "
        print(f"{star} {order_key(p):>3}  {p.get('id', '')}  {p.get('title', '')}")
    print(f"{len(projects)} project(s)")


async def run(args, reconciler: ProjectReconciler, cloud: CloudProjectsClient) -> int:
    if args.cmd == "list":
        _print_projects(await reconciler.list_projects(), args.json)
        return 0

    if args.cmd == "featured":
        _print_projects(await reconciler.list_featured_projects(args.include_test), args.json)
        return 0

    if args.cmd == "migrate":
        result = await reconciler.migrate_pending()
        if not result.success:
            print(f"Migration failed: {result.error}", file=sys.stderr)
            return 1
        print(result.message)
        return 0

    if args.cmd == "toggle-featured":
        featured = reconciler.toggle_featured(args.project_id)
        if featured is None:
            print(f"Project {args.project_id} not found in local storage", file=sys.stderr)
            return 1
        print(f"{args.project_id} featured={str(featured).lower()}")
        return 0

    if args.cmd == "clear-samples":
        result = reconciler.remove_sample_entries()
        print(result.message, file=sys.stdout if result.success else sys.stderr)
        return 0 if result.success else 1

    if args.cmd == "force-sync":
        reconciler.force_cloud_sync()
        print("Local storage cleared; projects now load from cloud storage")
        return 0

    if args.cmd == "status":
        local = reconciler.list_user_entries()
        try:
            cloud_count = len(await cloud.list_projects())
            cloud_state = f"{cloud_count} project(s)"
        except CloudStoreError as e:
            cloud_state = f"unreachable ({e})"
        print(f"local: {len(local)} user project(s), samples present: {reconciler.has_sample_entries()}")
        print(f"cloud: {cloud_state}")
        return 0

    try:
        return await _run_edit(args, reconciler, cloud)
    except CloudStoreError as e:
        print(f"Cloud storage error: {e}", file=sys.stderr)
        return 1


async def _run_edit(args, reconciler: ProjectReconciler, cloud: CloudProjectsClient) -> int:
    if args.cmd == "add":
        project = _project_from_args(args)
        if args.cloud:
            created = await cloud.create_project(project)
        else:
            created = reconciler.add_local_project(project)
        print(f"{created['id']}  {created.get('title', '')}")
        return 0

    if args.cmd == "edit":
        try:
            fields = parse_fields(args.fields)
        except ValueError as e:
            print(str(e), file=sys.stderr)
            return 2
        if args.cloud:
            updated = await cloud.update_project(args.project_id, fields)
        else:
            updated = reconciler.update_local_project(args.project_id, fields)
        if updated is None:
            print(f"Project {args.project_id} not found in local storage", file=sys.stderr)
            return 1
        print(f"Updated {args.project_id}")
        return 0

    if args.cmd == "delete":
        if args.cloud:
            await cloud.delete_project(args.project_id)
        else:
            result = reconciler.remove_local_projects([args.project_id])
            if not result.success or result.removed_count == 0:
                print(f"Project {args.project_id} not found in local storage", file=sys.stderr)
                return 1
        print(f"Deleted {args.project_id}")
        return 0

    if args.cmd == "clear-cloud":
        if not args.yes:
            print("Refusing to clear cloud storage without --yes", file=sys.stderr)
            return 1
        await cloud.clear_all()
        print("Cloud storage cleared")
        return 0

    return 2


def main(argv=None) -> int:
    settings = load_settings()
    configure_logging(settings.log_level)
    args = build_parser().parse_args(argv)

    cloud = CloudProjectsClient(args.api_url, timeout=settings.http_timeout)
    reconciler = ProjectReconciler(local=JsonFileLocalStore(args.local_store), cloud=cloud)
    return asyncio.run(run(args, reconciler, cloud))


if __name__ == "__main__":
    raise SystemExit(main())
