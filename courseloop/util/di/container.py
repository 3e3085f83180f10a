"""Dependency injection container."""

from dishka import AsyncContainer, make_async_container

from courseloop.util.di import select_providers


def create_container() -> AsyncContainer:
    """Build the production container: Supabase backend, College Scorecard lookup.

    Settings are read from the environment when first requested. The
    backend HTTP client is closed with the container.
    """
    return make_async_container(*select_providers())
