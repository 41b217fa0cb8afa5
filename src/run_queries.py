# run_queries.py - runs the bookstore query workflow against plp_bookstore.books
import asyncio
import logging
from typing import Any, Callable

from bson import json_util
from pymongo.errors import PyMongoError

from book_queries import (
    ASCENDING, AUTHOR_YEAR_INDEX, DESCENDING, TITLE_INDEX,
    PlanSummary, aggregate, analyze_plan, avg_price_by_genre_pipeline,
    books_by_decade_pipeline, create_index, delete_by_title, explain_find,
    fetch_page, find_by_author, find_by_genre, find_by_title,
    find_in_stock_after, find_projected, find_published_after, find_sorted,
    top_author_pipeline, update_price,
)
from mongo_client import get_books, get_client

logger = logging.getLogger(__name__)

Emit = Callable[[str, Any], None]


# =====================
# Output
# =====================
def print_result(title: str, result: Any) -> None:
    print(f"\n--- {title} ---")
    if isinstance(result, list):
        if not result:
            print("No documents found.")
        else:
            print(json_util.dumps(result, indent=2, ensure_ascii=False))
    else:
        print(result)


def print_plan(title: str, summary: dict) -> None:
    print(f"\n--- {title} ---")
    print(f"Execution Time: {summary['execution_time_ms']}ms")
    print(f"Documents Examined: {summary['docs_examined']}")
    print(f"Winning Plan Stage: {summary['stage_chain']}")
    print(f"Analysis: {summary['analysis']}")


def console(title: str, result: Any) -> None:
    if isinstance(result, PlanSummary):
        print_plan(title, result)
    else:
        print_result(title, result)


# =====================
# Task 2: CRUD
# =====================
async def run_task2(collection, emit: Emit = console) -> None:
    print("\n--- Running Task 2: Basic CRUD Operations ---")

    emit("Task 2.1: Find all 'Fiction' books", await find_by_genre(collection, "Fiction"))
    emit("Task 2.2: Find books published after 1950", await find_published_after(collection, 1950))
    emit("Task 2.3: Find books by 'George Orwell'", await find_by_author(collection, "George Orwell"))

    emit("Task 2.4: Update price of 'The Hobbit'", await update_price(collection, "The Hobbit", 15.99))
    emit("Task 2.4: Verifying update for 'The Hobbit'", await find_by_title(collection, "The Hobbit"))

    emit("Task 2.5: Delete 'Moby Dick'", await delete_by_title(collection, "Moby Dick"))


# =====================
# Task 3: Advanced queries
# =====================
async def run_task3(collection, emit: Emit = console) -> None:
    print("\n--- Running Task 3: Advanced Queries ---")

    emit("Task 3.1: Find in-stock books published after 1950",
         await find_in_stock_after(collection, 1950))
    emit("Task 3.2: Project title, author, and price",
         await find_projected(collection, "title", "author", "price"))

    emit("Task 3.3: Sort by price ascending",
         await find_sorted(collection, "price", ASCENDING, ("title", "price")))
    emit("Task 3.3: Sort by price descending",
         await find_sorted(collection, "price", DESCENDING, ("title", "price")))

    for page in (1, 2):
        emit(f"Task 3.4: Pagination - Page {page} (5 books)", await fetch_page(collection, page))


# =====================
# Task 4: Aggregation
# =====================
async def run_task4(collection, emit: Emit = console) -> None:
    print("\n--- Running Task 4: Aggregation Pipeline ---")

    emit("Task 4.1: Average price by genre",
         await aggregate(collection, avg_price_by_genre_pipeline()))
    emit("Task 4.2: Author with the most books",
         await aggregate(collection, top_author_pipeline()))
    emit("Task 4.3: Group books by publication decade",
         await aggregate(collection, books_by_decade_pipeline()))


# =====================
# Task 5: Indexing
# =====================
async def _create_index(collection, emit: Emit, title: str, keys) -> None:
    try:
        name = await create_index(collection, keys)
    except PyMongoError as e:
        logger.error("%s failed: %s", title, e)
        return
    emit(title, name)


async def run_task5(collection, emit: Emit = console) -> None:
    print("\n--- Running Task 5: Indexing ---")
    print("This task creates indexes and analyzes query performance.")

    await _create_index(collection, emit, "Task 5.1: Index on 'title'", TITLE_INDEX)
    await _create_index(
        collection, emit,
        "Task 5.2: Compound index on 'author' and 'published_year'", AUTHOR_YEAR_INDEX,
    )

    print("\nTask 5.3: Using explain() to analyze query performance")
    plan = await explain_find(collection, {"title": "1984"})
    emit("Task 5.3: Explain plan for query on indexed 'title' field", analyze_plan(plan))

    plan = await explain_find(
        collection, {"author": "George Orwell", "published_year": {"$lt": 1950}}
    )
    emit("Task 5.3: Explain plan for query on compound indexed fields "
         "('author', 'published_year')", analyze_plan(plan))


TASKS = (run_task2, run_task3, run_task4, run_task5)


async def run_tasks(collection, emit: Emit = console) -> None:
    for task in TASKS:
        await task(collection, emit)


# =====================
# Entry point
# =====================
async def run(client=None) -> int:
    try:
        client = client or get_client()
        await client.admin.command("ping")
        print("Connected successfully to MongoDB server")
        await run_tasks(get_books(client))
    except PyMongoError as e:
        logger.exception("Query workflow aborted")
        print(f"An error occurred: {e}")
        return 1
    finally:
        if client is not None:
            await client.close()
        print("\nConnection to MongoDB closed.")
    return 0


def main() -> int:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    return asyncio.run(run())


if __name__ == "__main__":
    raise SystemExit(main())
