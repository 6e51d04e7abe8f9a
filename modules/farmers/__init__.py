"""
Farmers Module
Registration, dashboard table, farmers grid and CSV export

VERSION HISTORY:
1.0.0 - Modular layout
      - query: filter/sort/paginate pipeline shared by both views
      - repository: fetch/normalize/register against the farmer store
      - export: CSV of the filtered view

PUBLIC API:
- apply(): ordered page of farmers for a QueryState
- run(): page plus the full filtered list and page bounds
- export_csv(): CSV bytes and file name for a list of farmers
- FarmerRepository: list()/refresh()/register() over a store
"""

from .export import ExportResult, export_csv
from .query import (
    Debouncer,
    QueryResult,
    QueryState,
    apply,
    farm_types,
    run,
    suggestions,
    summarize,
    toggle_sort,
)
from .repository import FarmerError, FarmerLoadError, FarmerRepository, FarmerSaveError

__version__ = "1.0.0"

__all__ = [
    'apply',
    'run',
    'toggle_sort',
    'farm_types',
    'suggestions',
    'summarize',
    'export_csv',
    'Debouncer',
    'QueryState',
    'QueryResult',
    'ExportResult',
    'FarmerRepository',
    'FarmerError',
    'FarmerLoadError',
    'FarmerSaveError',
]
