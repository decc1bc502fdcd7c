"""Base repository with shared Supabase client."""

from supabase._async.client import AsyncClient

from supabase import Client


class BaseRepository:
    """Base class for repositories.

    Product lookups run on the AsyncClient inside request handlers; order
    recording runs on the sync Client because checkout is synchronous.
    """

    def __init__(self, client: Client | AsyncClient) -> None:
        self.client = client
