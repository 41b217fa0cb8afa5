# book_queries.py
from typing import Any, Dict, List, Optional, Tuple

ASCENDING = 1
DESCENDING = -1

PAGE_SIZE = 5


# ----------------------------
# Basic finds
# ----------------------------
async def find_by_genre(collection, genre: str) -> List[dict]:
    return await collection.find({"genre": genre}).to_list()


async def find_published_after(collection, year: int) -> List[dict]:
    return await collection.find({"published_year": {"$gt": year}}).to_list()


async def find_by_author(collection, author: str) -> List[dict]:
    return await collection.find({"author": author}).to_list()


async def find_by_title(collection, title: str) -> Optional[dict]:
    return await collection.find_one({"title": title})


async def update_price(collection, title: str, price: float) -> Dict[str, int]:
    result = await collection.update_one(
        {"title": title},
        {"$set": {"price": price}},
    )
    return {
        "matched_count": result.matched_count,
        "modified_count": result.modified_count,
    }


async def delete_by_title(collection, title: str) -> Dict[str, int]:
    result = await collection.delete_one({"title": title})
    return {"deleted_count": result.deleted_count}


# ----------------------------
# Advanced queries
# ----------------------------
def projection(*fields: str, include_id: bool = False) -> Dict[str, int]:
    proj = {f: 1 for f in fields}
    if not include_id:
        proj["_id"] = 0
    return proj


async def find_in_stock_after(collection, year: int) -> List[dict]:
    return await collection.find(
        {"in_stock": True, "published_year": {"$gt": year}}
    ).to_list()


async def find_projected(collection, *fields: str) -> List[dict]:
    return await collection.find({}, projection(*fields)).to_list()


async def find_sorted(
    collection,
    key: str,
    direction: int = ASCENDING,
    fields: Tuple[str, ...] = (),
) -> List[dict]:
    proj = projection(*fields) if fields else None
    return await collection.find({}, proj).sort([(key, direction)]).to_list()


def page_bounds(page: int, page_size: int = PAGE_SIZE) -> Tuple[int, int]:
    """Return ``(skip, limit)`` for a 1-based page number."""
    if page < 1:
        raise ValueError(f"page must be >= 1, got {page}")
    if page_size < 1:
        raise ValueError(f"page_size must be >= 1, got {page_size}")
    return (page - 1) * page_size, page_size


async def fetch_page(
    collection,
    page: int,
    page_size: int = PAGE_SIZE,
    key: str = "published_year",
    fields: Tuple[str, ...] = ("title", "published_year"),
) -> List[dict]:
    """
    One page of the collection ordered by ``key`` ascending.
    _id breaks ties so pages never overlap when keys repeat.
    """
    skip, limit = page_bounds(page, page_size)
    return await (
        collection.find({}, projection(*fields))
        .sort([(key, ASCENDING), ("_id", ASCENDING)])
        .skip(skip)
        .limit(limit)
        .to_list()
    )


# ----------------------------
# Aggregation pipelines
# ----------------------------
def avg_price_by_genre_pipeline() -> List[dict]:
    return [
        {
            "$group": {
                "_id": "$genre",
                "averagePrice": {"$avg": "$price"},
                "bookCount": {"$sum": 1},
            }
        },
        {"$sort": {"averagePrice": -1, "_id": 1}},
    ]


def top_author_pipeline() -> List[dict]:
    # equal counts fall back to author name, A-Z
    return [
        {"$group": {"_id": "$author", "numberOfBooks": {"$sum": 1}}},
        {"$sort": {"numberOfBooks": -1, "_id": 1}},
        {"$limit": 1},
    ]


def books_by_decade_pipeline() -> List[dict]:
    return [
        {
            "$group": {
                "_id": {
                    "$subtract": [
                        "$published_year",
                        {"$mod": ["$published_year", 10]},
                    ]
                },
                "count": {"$sum": 1},
            }
        },
        {"$sort": {"_id": 1}},
        {"$project": {"decade": "$_id", "count": 1, "_id": 0}},
    ]


async def aggregate(collection, pipeline: List[dict]) -> List[dict]:
    cursor = await collection.aggregate(pipeline)
    return await cursor.to_list()


# ----------------------------
# Indexes and explain
# ----------------------------
TITLE_INDEX = [("title", ASCENDING)]
AUTHOR_YEAR_INDEX = [("author", ASCENDING), ("published_year", DESCENDING)]

INDEX_SCAN = "index scan"
COLLECTION_SCAN = "full collection scan"
OTHER_SCAN = "other"


async def create_index(collection, keys: List[Tuple[str, int]], **kwargs) -> str:
    return await collection.create_index(keys, **kwargs)


async def explain_find(collection, query: dict, verbosity: str = "executionStats") -> dict:
    return await collection.database.command(
        {
            "explain": {"find": collection.name, "filter": query},
            "verbosity": verbosity,
        }
    )


def classify_stage(stage_name: Optional[str]) -> str:
    name = (stage_name or "").upper()
    if "IXSCAN" in name:
        return INDEX_SCAN
    if "COLLSCAN" in name:
        return COLLECTION_SCAN
    return OTHER_SCAN


def _scan_stage(winning: Dict[str, Any]) -> Dict[str, Any]:
    # FETCH -> IXSCAN style plans carry the scan one level down
    return winning.get("inputStage") or winning


class PlanSummary(dict):
    """Explain summary: timing, docs examined, stage chain and scan classification."""


def analyze_plan(explain: Dict[str, Any]) -> PlanSummary:
    """
    Summarise an ``executionStats`` explain document.

    The winning stage is ``executionStats.executionStages``; when it wraps an
    ``inputStage`` the scan is read from that child. Slot-based plans name
    their stages differently, so if neither stage classifies, the
    ``queryPlanner.winningPlan`` tree is tried the same way.
    """
    stats = explain.get("executionStats") or {}
    winning = stats.get("executionStages") or {}
    scan = _scan_stage(winning)

    analysis = classify_stage(scan.get("stage"))
    if analysis == OTHER_SCAN:
        analysis = classify_stage(winning.get("stage"))

    if analysis == OTHER_SCAN:
        planned = (explain.get("queryPlanner") or {}).get("winningPlan") or {}
        planned = planned.get("queryPlan") or planned
        if planned:
            planned_scan = _scan_stage(planned)
            if classify_stage(planned_scan.get("stage")) != OTHER_SCAN:
                winning, scan = planned, planned_scan
                analysis = classify_stage(scan.get("stage"))

    return PlanSummary(
        execution_time_ms=stats.get("executionTimeMillis"),
        docs_examined=stats.get("totalDocsExamined"),
        winning_stage=winning.get("stage"),
        scan_stage=scan.get("stage"),
        stage_chain=f"{winning.get('stage')} -> {scan.get('stage')}",
        analysis=analysis,
    )
