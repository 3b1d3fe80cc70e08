"""
FastAPI-based web front-end for the HowToHelp site.

This module wires the resolvers to page routes, the sitemap and the lead
capture stub. Pages are rendered with Jinja2 templates.
"""
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import HTMLResponse, Response
from fastapi.templating import Jinja2Templates

from howtohelp import __version__
from howtohelp.cache import get_cache_client
from howtohelp.cms import ContentAPIClient
from howtohelp.config import Settings, load_settings
from howtohelp.models.lead import LeadSubmission
from howtohelp.resolvers import (
    build_sitemap,
    list_categories,
    list_latest_articles,
    render_sitemap_xml,
    resolve_article,
    resolve_articles_by_category,
    resolve_category,
    resolve_related,
)
from howtohelp.seo import (
    article_image_url,
    article_json_ld,
    article_metadata,
    category_metadata,
    dump_json_ld,
    organization_json_ld,
    site_metadata,
)
from howtohelp.web.rendering import format_date, render_markdown

# Set up structured logger
logger = structlog.get_logger()

# Setup templates
templates = Jinja2Templates(directory=Path(__file__).parent / "templates")
templates.env.filters["markdown"] = render_markdown
templates.env.filters["long_date"] = format_date

LEAD_SUCCESS_MESSAGE = "Thanks for reaching out! We'll be in touch soon."


def create_app(
    settings: Optional[Settings] = None,
    content_client: Optional[ContentAPIClient] = None,
) -> FastAPI:
    """Create and configure the FastAPI application."""
    settings = settings or load_settings()

    app = FastAPI(
        title=settings.site.name,
        description=settings.site.description,
        version=__version__,
        debug=settings.debug,
    )

    # Store settings in app state
    app.state.settings = settings
    app.state.content_client = content_client
    app.state.cache_client = None

    @app.on_event("startup")
    async def startup_event():
        """Initialize resources on startup."""
        logger.info("Starting web front-end", cms_configured=settings.cms.is_configured())
        if app.state.content_client is None:
            app.state.cache_client = get_cache_client(settings.cache)
            app.state.content_client = ContentAPIClient(
                settings.cms,
                cache=app.state.cache_client,
            )
            app.state.owns_content_client = True
        else:
            app.state.owns_content_client = False

    @app.on_event("shutdown")
    async def shutdown_event():
        """Clean up resources on shutdown."""
        if app.state.owns_content_client and app.state.content_client:
            await app.state.content_client.close()
        if app.state.cache_client is not None:
            await app.state.cache_client.close()

    def render(request: Request, name: str, status_code: int = 200, **context: Any) -> HTMLResponse:
        context.setdefault("metadata", site_metadata(settings))
        context["settings"] = settings
        context["organization_json_ld"] = dump_json_ld(organization_json_ld(settings))
        return templates.TemplateResponse(
            request=request,
            name=name,
            context=context,
            status_code=status_code,
        )

    @app.get("/", response_class=HTMLResponse)
    async def home(request: Request):
        """Home page listing the latest articles."""
        articles = await list_latest_articles(app.state.content_client)
        return render(request, "index.html", articles=articles)

    @app.get("/articles/{slug}", response_class=HTMLResponse)
    async def article_detail(request: Request, slug: str):
        """Article page with related articles from the same category."""
        client = app.state.content_client
        article = await resolve_article(client, slug)
        if article is None:
            return render(
                request,
                "not_found.html",
                status_code=404,
                metadata=article_metadata(None, settings),
            )

        related = await resolve_related(client, article.category_slug, article.id)
        return render(
            request,
            "article.html",
            article=article,
            related_articles=related,
            featured_image_url=article_image_url(article, settings) if article.featured_image else None,
            metadata=article_metadata(article, settings),
            article_json_ld=dump_json_ld(article_json_ld(article, settings)),
        )

    @app.get("/categories", response_class=HTMLResponse)
    async def category_index(request: Request):
        """Index of every category."""
        categories = await list_categories(app.state.content_client)
        return render(request, "categories.html", categories=categories)

    @app.get("/categories/{slug}", response_class=HTMLResponse)
    async def category_detail(request: Request, slug: str):
        """Articles within a single category."""
        client = app.state.content_client
        category = await resolve_category(client, slug)
        if category is None:
            return render(
                request,
                "not_found.html",
                status_code=404,
                metadata=category_metadata(None, settings),
            )

        articles = await resolve_articles_by_category(client, category)
        return render(
            request,
            "category.html",
            category=category,
            articles=articles,
            metadata=category_metadata(category, settings),
        )

    @app.get("/sitemap.xml")
    async def sitemap():
        """Sitemap of every page."""
        entries = await build_sitemap(app.state.content_client, settings.site.url)
        return Response(content=render_sitemap_xml(entries), media_type="application/xml")

    @app.post("/api/leads")
    async def capture_lead(lead: LeadSubmission):
        """Acknowledge a lead capture submission. Nothing is stored."""
        logger.info("Lead captured", name=lead.name, email=lead.email)
        return {"status": "success", "message": LEAD_SUCCESS_MESSAGE}

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "timestamp": datetime.now(timezone.utc),
            "cms_configured": settings.cms.is_configured(),
        }

    return app
