"""
Translates listing filters into a SQLAlchemy query over materials.

- department, semester, type: exact match
- subject: case-insensitive substring
- search: case-insensitive substring on title OR description OR subject
All supplied filters are ANDed; the search group is one term of that AND.
Results are newest first and paginated with a 1-indexed page.
"""

from sqlalchemy import Select, and_, or_, select

from exam_portal.models.material import Material
from exam_portal.schemas.material import MaterialFilters


LIKE_ESCAPE = "\\"


def _contains_pattern(term: str) -> str:
    """Build a LIKE pattern matching ``term`` literally anywhere in the value"""
    escaped = (
        term.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", f"{LIKE_ESCAPE}%")
        .replace("_", f"{LIKE_ESCAPE}_")
    )
    return f"%{escaped}%"


def build_material_conditions(filters: MaterialFilters) -> list:
    """Return the WHERE terms for the supplied filters (empty list = match all)"""
    conditions = []

    if filters.department:
        conditions.append(Material.department == filters.department)
    if filters.semester is not None:
        conditions.append(Material.semester == filters.semester)
    if filters.type is not None:
        conditions.append(Material.type == filters.type)
    if filters.subject:
        conditions.append(Material.subject.ilike(_contains_pattern(filters.subject), escape=LIKE_ESCAPE))
    if filters.search:
        pattern = _contains_pattern(filters.search)
        conditions.append(
            or_(
                Material.title.ilike(pattern, escape=LIKE_ESCAPE),
                Material.description.ilike(pattern, escape=LIKE_ESCAPE),
                Material.subject.ilike(pattern, escape=LIKE_ESCAPE),
            )
        )

    return conditions


def build_material_query(filters: MaterialFilters) -> Select:
    """Filtered, newest-first, paginated SELECT of materials"""
    query = select(Material)

    conditions = build_material_conditions(filters)
    if conditions:
        query = query.where(and_(*conditions))

    return (
        query.order_by(Material.created_at.desc())
        .offset((filters.page - 1) * filters.limit)
        .limit(filters.limit)
    )
