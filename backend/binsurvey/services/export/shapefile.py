# backend/binsurvey/services/export/shapefile.py
import shutil
from pathlib import Path
from typing import Iterable

import shapefile  # pyshp
from pyproj import CRS, Transformer

from binsurvey.schemas.commons import iso_instant
from binsurvey.schemas.entry import BinSurveyEntry

# DBF のフィールド名は 10 文字まで
ENTRY_FIELDS = (
    ("entry_id", "N", 18, 0),
    ("datetime", "C", 25, 0),
    ("street", "C", 80, 0),
    ("bin_types", "C", 100, 0),
    ("quantity", "N", 10, 0),
    ("comments", "C", 254, 0),
    ("synced", "L", 1, 0),
)


def export_entries_shapefile(
    entries: Iterable[BinSurveyEntry],
    out_zip: Path,
    target_epsg: int = 4326,
    encoding: str = "UTF-8",
) -> Path:
    """Write every entry as a point to ``entries.shp`` (+ .prj) in ``target_epsg`` and zip it to ``out_zip``."""
    out_dir = out_zip.parent / out_zip.stem
    out_dir.mkdir(parents=True, exist_ok=True)

    dst_crs = CRS.from_epsg(target_epsg)
    tf = Transformer.from_crs(CRS.from_epsg(4326), dst_crs, always_xy=True)

    path_base = out_dir / "entries"
    w = shapefile.Writer(str(path_base), shapeType=shapefile.POINT, encoding=encoding)
    for f in ENTRY_FIELDS:
        w.field(*f)
    for e in entries:
        x, y = tf.transform(e.longitude, e.latitude)
        w.point(x, y)
        w.record(
            e.id,
            iso_instant(e.datetime),
            e.street,
            ", ".join(e.bin_types)[:100],
            e.quantity,
            (e.comments or "")[:254],
            e.synced,
        )
    w.close()
    path_base.with_suffix(".prj").write_text(dst_crs.to_wkt())

    # zip化
    shutil.make_archive(str(out_dir), "zip", root_dir=out_dir)
    Path(str(out_dir) + ".zip").replace(out_zip)
    return out_zip
