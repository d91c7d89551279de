"""Domain interfaces."""
from .repository import IMatchRepository, ISummonerRepository, MAX_PAGE_SIZE, clamp_paging

__all__ = [
    'IMatchRepository',
    'ISummonerRepository',
    'MAX_PAGE_SIZE',
    'clamp_paging',
]
