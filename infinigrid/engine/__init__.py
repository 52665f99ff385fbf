from infinigrid.engine.config import GridEngineConfig
from infinigrid.engine.errors import (EmptyCatalogError, InfiniteGridError,
                                     LayoutDegenerate, ResourceLoadFailure)
from infinigrid.engine.grid_engine import CellFrame, GridEngine
from infinigrid.engine.grid_layout import GridCell, GridLayout, compute_layout
from infinigrid.engine.image_pool import build_pool
from infinigrid.engine.momentum import MomentumPhase, MomentumSimulator, PanState
from infinigrid.engine.preload import PreloadGate, preload_all
from infinigrid.engine.proximity import proximity_scale
from infinigrid.engine.toroidal import resolve_position, wrap
