"""
dropchess: piece-drop setup phase for a chess variant.

Two kings are dropped at random on their home ranks, then White and Black
alternately drop the rest of their pieces under the placement rules. When the
drop phase ends the final position is handed to an ordinary chess engine.
"""

__version__ = "0.3.0"
__FILE_VERSION__ = "dropchess_v0.3.0_placement_engine"
