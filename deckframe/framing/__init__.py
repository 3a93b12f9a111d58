"""
framing/__init__.py - Deck framing engines.

Single-rectangle calculation, multi-section merging and boundary
validation, plus the enums and data models they share.
"""

# Enumerations first; spans.tables depends on them
from .enums import (
    LumberSize,
    PostSize,
    AttachmentType,
    BeamType,
    FootingType,
    PictureFrame,
    LedgerUsage,
    BeamUsage,
    JoistUsage,
    RimJoistUsage,
    BlockingUsage,
)

# Models
from .models import (
    DeckDimensions,
    WallSegment,
    RectangularSection,
    LumberMember,
    Ledger,
    Beam,
    Joist,
    RimJoist,
    Blocking,
    Post,
    Footing,
    StructuralComponents,
)
from .inputs import DeckInputSpec

# Engines
from .beams import BeamPostSolver, BeamPlacement, PostLayout, select_post_size, beam_ply_for_post
from .joists import JoistLayoutEngine, JoistSizeResult, select_joist_size
from .rims import RimJoistLayoutEngine
from .blocking import BlockingEngine
from .calculator import StructureCalculator, calculate_structure
from .multi_section import (
    GlobalJoistDirection,
    MergedBeams,
    MultiSectionOrchestrator,
    SectionResult,
    calculate_multi_section_structure,
    determine_global_joist_direction,
    edges_overlap,
    extend_ledger,
    find_ledger_edge_in_section,
    group_beams,
    is_simple_rectangle,
    merge_beams,
    remove_duplicate_footings,
    remove_duplicate_posts,
    section_dimensions,
    should_merge_beams,
)
from .validator import ComponentIssues, StructuralValidator, ValidationReport, validate_structure


__all__ = [
    # Enums
    "LumberSize",
    "PostSize",
    "AttachmentType",
    "BeamType",
    "FootingType",
    "PictureFrame",
    "LedgerUsage",
    "BeamUsage",
    "JoistUsage",
    "RimJoistUsage",
    "BlockingUsage",
    # Models
    "DeckDimensions",
    "WallSegment",
    "RectangularSection",
    "LumberMember",
    "Ledger",
    "Beam",
    "Joist",
    "RimJoist",
    "Blocking",
    "Post",
    "Footing",
    "StructuralComponents",
    "DeckInputSpec",
    # Engines
    "BeamPostSolver",
    "BeamPlacement",
    "PostLayout",
    "select_post_size",
    "beam_ply_for_post",
    "JoistLayoutEngine",
    "JoistSizeResult",
    "select_joist_size",
    "RimJoistLayoutEngine",
    "BlockingEngine",
    "StructureCalculator",
    "calculate_structure",
    # Multi-section
    "GlobalJoistDirection",
    "MergedBeams",
    "MultiSectionOrchestrator",
    "SectionResult",
    "calculate_multi_section_structure",
    "determine_global_joist_direction",
    "edges_overlap",
    "extend_ledger",
    "find_ledger_edge_in_section",
    "group_beams",
    "is_simple_rectangle",
    "merge_beams",
    "remove_duplicate_footings",
    "remove_duplicate_posts",
    "section_dimensions",
    "should_merge_beams",
    # Validation
    "ComponentIssues",
    "StructuralValidator",
    "ValidationReport",
    "validate_structure",
]
