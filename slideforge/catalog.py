"""
Asset catalogs for patterns and icons.

Frames only keep an asset's id; the catalog supplies the defaults applied
when a layer is created from it (scale, opacity, tile size) and the source
the renderer draws (a file path or inline SVG).
"""

from typing import Iterator, Optional
import logging

from pydantic import BaseModel, ConfigDict, Field

from .layers import IconLayer, PatternLayer

logger = logging.getLogger(__name__)


class AssetRecord(BaseModel):
    """
    A catalog entry.

    Serialization format:
    {
        "id": "geo-dots-grid",
        "name": "Dot Grid",
        "category": "geometric",
        "path": "/patterns/dots.svg" | null,
        "svg": "<svg ...>" | null,
        "defaultScale": 1.0,
        "defaultOpacity": 1.0,
        "tileSize": 20
    }
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True, extra='ignore')

    id: str
    name: str = Field(default='')
    category: str = Field(default='')
    path: Optional[str] = Field(default=None)
    svg: Optional[str] = Field(default=None)
    default_scale: float = Field(default=1.0, alias='defaultScale')
    default_opacity: float = Field(default=1.0, alias='defaultOpacity')
    tile_size: int = Field(default=0, alias='tileSize')


class AssetCatalog:
    """
    Lookup of asset records by id.

    Args:
        records: Initial records, later ids replace earlier ones
    """

    def __init__(self, records: Optional[list[AssetRecord]] = None):
        self._records: dict[str, AssetRecord] = {}
        for record in records or []:
            self.register(record)

    def register(self, record: AssetRecord) -> None:
        if record.id in self._records:
            logger.debug(f"Replacing asset record {record.id}")
        self._records[record.id] = record

    def get(self, asset_id: str) -> Optional[AssetRecord]:
        """Get a record by id, None if unknown."""
        return self._records.get(asset_id)

    def by_category(self, category: str) -> list[AssetRecord]:
        return [r for r in self._records.values() if r.category == category]

    def __contains__(self, asset_id: object) -> bool:
        return asset_id in self._records

    def __iter__(self) -> Iterator[AssetRecord]:
        return iter(self._records.values())

    def __len__(self) -> int:
        return len(self._records)

    # ------------------------------------------------------------------
    # Layer factories
    # ------------------------------------------------------------------

    def create_pattern_layer(self, pattern_id: str) -> Optional[PatternLayer]:
        """New pattern layer using the record's defaults, None if unknown."""
        record = self.get(pattern_id)
        if record is None:
            logger.debug(f"Unknown pattern id: {pattern_id}")
            return None
        return PatternLayer.create(
            pattern_id=record.id,
            scale=record.default_scale,
            opacity=record.default_opacity,
        )

    def create_icon_layer(self, icon_id: str) -> Optional[IconLayer]:
        """New icon layer with the record's path and name, None if unknown."""
        record = self.get(icon_id)
        if record is None:
            logger.debug(f"Unknown icon id: {icon_id}")
            return None
        return IconLayer.create(icon_id=record.id, path=record.path or '', name=record.name)


def _pattern(id: str, name: str, category: str, scale: float = 1.0, tile: int = 20, path: Optional[str] = None) -> AssetRecord:
    return AssetRecord(
        id=id,
        name=name,
        category=category,
        path=path,
        default_scale=scale,
        default_opacity=1.0,
        tile_size=tile,
    )


def default_patterns() -> AssetCatalog:
    """Built-in pattern catalog."""
    return AssetCatalog([
        _pattern('geo-dots-grid', 'Dot Grid', 'geometric'),
        _pattern('geo-dots-large', 'Large Dots', 'geometric', scale=1.5, tile=40),
        _pattern('geo-diagonal-lines', 'Diagonal Lines', 'geometric', tile=16),
        _pattern('geo-crosshatch', 'Crosshatch', 'geometric'),
        _pattern('geo-hex-grid', 'Hex Grid', 'geometric', tile=28),
        _pattern('org-waves', 'Waves', 'organic', tile=100),
        _pattern('org-scattered-dots', 'Scattered Dots', 'organic', tile=60),
        _pattern('min-subtle-grid', 'Subtle Grid', 'minimal', tile=32),
        _pattern('min-tiny-dots', 'Tiny Dots', 'minimal', tile=12),
        _pattern('brand-network-nodes', 'Network Nodes', 'brand', tile=80),
        _pattern('pattern-street-grid', 'Market Map', 'brand', tile=300, path='/patterns/street-grid.svg'),
        _pattern('pattern-city-blocks-1', 'Grid City', 'brand', tile=300, path='/patterns/city-blocks-1.svg'),
    ])


def default_icons() -> AssetCatalog:
    """Built-in brand icon catalog."""
    return AssetCatalog([
        AssetRecord(id='building', name='Building', category='brand', path='/icons/building.svg'),
        AssetRecord(id='map-pin', name='Map Pin', category='brand', path='/icons/map-pin.svg'),
        AssetRecord(id='chart', name='Chart', category='brand', path='/icons/chart.svg'),
        AssetRecord(id='key', name='Key', category='brand', path='/icons/key.svg'),
    ])
