"""Example 01: Basic Usage - objects, heads and renames.

This example demonstrates the fundamental operations against one bucket:
- Opening a connection from a bucket URL
- put / get with the body conversion helpers
- Reading object heads and user metadata
- copy, rename (copy-then-delete) and delete

Requires an S3-compatible endpoint. For MinIO:
  docker run -p 9000:9000 minio/minio server /data
  export S3CONN_ENDPOINT_URL=http://127.0.0.1:9000 S3CONN_REGION=us-east-1
  export S3CONN_ACCESS_KEY_ID=minioadmin S3CONN_SECRET_ACCESS_KEY=minioadmin
  export S3CONN_ADDRESSING_STYLE=path
"""

import os

from s3conn import BucketConnection, ObjectNotFoundError, config_from_env


def main():
    url = os.getenv("S3CONN_URL", "s3://s3conn-examples")
    conn = BucketConnection.from_url(url, config=config_from_env(), strict=True)
    print(f"Connected: {conn!r} ({conn.url()})")

    # Step 1: store a few objects
    conn.put("greetings/en.txt", "hello", content_type="text/plain", metadata={"lang": "en"})
    conn.put("greetings/fr.txt", "bonjour".encode("utf-8"), metadata={"lang": "fr"})

    # Step 2: read them back; get() returns the streaming body
    body = conn.get("greetings/en.txt")
    print("en:", BucketConnection.body_to_str(body))
    print("fr:", conn.get_str("greetings/fr.txt"))

    # Step 3: heads
    head = conn.head("greetings/en.txt")
    print(f"en.txt is {head.size_bytes} bytes of {head.content_type}, metadata={head.metadata}")

    # Step 4: listing with a predicate
    for summary in conn.list_heads(prefix="greetings/", predicate=lambda s: s.size_bytes > 5):
        print("long greeting:", summary.key)

    # Step 5: copy, rename, delete
    conn.copy("greetings/en.txt", "greetings/en-copy.txt")
    conn.rename("greetings/en-copy.txt", "archive/en.txt")
    print("copy still present:", conn.exists("greetings/en-copy.txt"))

    for key in ["greetings/en.txt", "greetings/fr.txt", "archive/en.txt"]:
        conn.delete(key)

    try:
        conn.get("greetings/en.txt")
    except ObjectNotFoundError as e:
        print("after delete:", e)


if __name__ == "__main__":
    main()
