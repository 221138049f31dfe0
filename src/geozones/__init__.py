"""
geozones: group geocoded document records into named geographic zones.

The public entrypoints are re-exported here for library use; the CLI lives in
`geozones.cli` and the HTTP API in `geozones.api.app`.
"""

from geozones.zoning.clustering import assign_zone_labels, cluster_points
from geozones.zoning.service import assign_zones
from geozones.zoning.summary import summarize_zones

__all__ = ["assign_zone_labels", "assign_zones", "cluster_points", "summarize_zones"]
