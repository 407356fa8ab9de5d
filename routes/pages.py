# routes/pages.py
from pathlib import Path

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.templating import Jinja2Templates

from models.project import with_placeholder_images
from storage.cloud import DatabaseProjectsSource
from storage.local_store import MemoryLocalStore
from storage.reconciler import ProjectReconciler

templates = Jinja2Templates(directory=str(Path(__file__).resolve().parent.parent / "templates"))

router = APIRouter(tags=["Pages"])

SERVICES = [
    {"title": "Web Design", "summary": "Sites planned around the brand and the people using them."},
    {"title": "Frontend Development", "summary": "Fast, responsive builds on modern frameworks."},
    {"title": "CMS Integration", "summary": "Content the team can edit without a developer."},
    {"title": "3D Rendering", "summary": "Architectural visualization and product renders."},
]


def site_reconciler(request: Request) -> ProjectReconciler:
    # the server has no device-local entries
    return ProjectReconciler(
        local=MemoryLocalStore(),
        cloud=DatabaseProjectsSource(request.app.state.config.db_path),
    )


@router.get("/", response_class=HTMLResponse)
async def home(request: Request):
    featured = await site_reconciler(request).list_featured_projects(include_test_entries=False)
    return templates.TemplateResponse(
        request,
        "index.html",
        {"projects": [with_placeholder_images(p) for p in featured]},
    )


@router.get("/projects", response_class=HTMLResponse)
async def projects(request: Request):
    all_projects = await site_reconciler(request).list_projects()
    return templates.TemplateResponse(
        request,
        "projects.html",
        {"projects": [with_placeholder_images(p) for p in all_projects]},
    )


@router.get("/projects/{slug}", response_class=HTMLResponse)
async def project_detail(request: Request, slug: str):
    project = await site_reconciler(request).get_project_by_slug(slug)
    if project is None:
        return JSONResponse({"error": "Project not found"}, status_code=404)
    return templates.TemplateResponse(
        request,
        "project_detail.html",
        {"project": with_placeholder_images(project)},
    )


@router.get("/services", response_class=HTMLResponse)
async def services(request: Request):
    return templates.TemplateResponse(request, "services.html", {"services": SERVICES})


@router.get("/about", response_class=HTMLResponse)
async def about(request: Request):
    return templates.TemplateResponse(request, "about.html", {})


@router.get("/contact", response_class=HTMLResponse)
async def contact(request: Request):
    return templates.TemplateResponse(request, "contact.html", {})


@router.get("/admin/projects", response_class=HTMLResponse)
async def admin_projects(request: Request):
    all_projects = await site_reconciler(request).list_projects()
    return templates.TemplateResponse(request, "admin_projects.html", {"projects": all_projects})
