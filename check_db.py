# run from project root: python check_db.py
import sys

from blogcms.core.config import Settings
from blogcms.database.connection import connect, ping


def main():
    settings = Settings.from_env()
    uri = settings.mongo_uri
    # mask credentials
    print(f"URI host: {uri.split('@')[-1] if '@' in uri else uri}")

    client = connect(settings)
    try:
        if not ping(client):
            print("MongoDB connection failed")
            return 1
        count = client[settings.mongo_db_name][settings.mongo_collection].count_documents({})
        print(f"MongoDB connection successful, {count} posts in {settings.mongo_collection!r}")
        return 0
    finally:
        client.close()


if __name__ == "__main__":
    sys.exit(main())
