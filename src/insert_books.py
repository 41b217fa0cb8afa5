# insert_books.py
import asyncio

from mongo_client import MONGODB_COLLECTION, MONGODB_DBNAME, get_books, get_client

BOOKS = [
    {"title": "To Kill a Mockingbird", "author": "Harper Lee", "genre": "Fiction",
     "published_year": 1960, "price": 12.99, "in_stock": True},
    {"title": "1984", "author": "George Orwell", "genre": "Dystopian",
     "published_year": 1949, "price": 10.99, "in_stock": True},
    {"title": "The Great Gatsby", "author": "F. Scott Fitzgerald", "genre": "Fiction",
     "published_year": 1925, "price": 9.99, "in_stock": True},
    {"title": "Brave New World", "author": "Aldous Huxley", "genre": "Dystopian",
     "published_year": 1932, "price": 11.50, "in_stock": False},
    {"title": "The Hobbit", "author": "J.R.R. Tolkien", "genre": "Fantasy",
     "published_year": 1937, "price": 12.50, "in_stock": True},
    {"title": "The Catcher in the Rye", "author": "J.D. Salinger", "genre": "Fiction",
     "published_year": 1951, "price": 8.99, "in_stock": True},
    {"title": "Pride and Prejudice", "author": "Jane Austen", "genre": "Romance",
     "published_year": 1813, "price": 7.99, "in_stock": True},
    {"title": "The Lord of the Rings", "author": "J.R.R. Tolkien", "genre": "Fantasy",
     "published_year": 1954, "price": 19.99, "in_stock": True},
    {"title": "Animal Farm", "author": "George Orwell", "genre": "Political Satire",
     "published_year": 1945, "price": 8.50, "in_stock": False},
    {"title": "The Alchemist", "author": "Paulo Coelho", "genre": "Fiction",
     "published_year": 1988, "price": 10.99, "in_stock": True},
    {"title": "Moby Dick", "author": "Herman Melville", "genre": "Adventure",
     "published_year": 1851, "price": 12.50, "in_stock": False},
    {"title": "Wuthering Heights", "author": "Emily Brontë", "genre": "Gothic Fiction",
     "published_year": 1847, "price": 9.99, "in_stock": True},
]


def sample_books():
    # fresh dicts: insert_many stamps _id onto what it is given
    return [dict(book) for book in BOOKS]


async def seed_books(collection) -> int:
    """Replace the contents of ``collection`` with the sample books."""
    deleted = await collection.delete_many({})
    if deleted.deleted_count:
        print(f"   Removed {deleted.deleted_count} existing documents")

    result = await collection.insert_many(sample_books())
    print(f"   Inserted {len(result.inserted_ids)} documents into '{collection.name}'")
    return len(result.inserted_ids)


async def run() -> int:
    client = get_client()
    try:
        print(f"➡️  Seeding {MONGODB_DBNAME}.{MONGODB_COLLECTION}")
        await seed_books(get_books(client))
        print("✅ Seeding complete.")
    finally:
        await client.close()
    return 0


def main() -> int:
    return asyncio.run(run())


if __name__ == "__main__":
    raise SystemExit(main())
