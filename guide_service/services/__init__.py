"""
Services package for Guide Service

This package contains the layout transform and the refresh pipeline.
"""
from guide_service.services.axis_service import build_axis
from guide_service.services.grid_service import annotate_document, map_program
from guide_service.services.layout_service import build_layout
from guide_service.services.guide_fetch_service import fetch_guide_document, GuideSourceError
from guide_service.services.guide_state import GuideState
from guide_service.services.refresh_coordinator import RefreshCoordinator
from guide_service.services.scheduler_service import GuideScheduler

__all__ = [
    'build_axis',
    'annotate_document',
    'map_program',
    'build_layout',
    'fetch_guide_document',
    'GuideSourceError',
    'GuideState',
    'RefreshCoordinator',
    'GuideScheduler',
]
