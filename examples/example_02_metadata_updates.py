"""Example 02: Metadata updates through copy-onto-self.

S3 cannot change the metadata of a stored object. put_head() reads the current
metadata, computes the new set, and copies the object onto itself with
MetadataDirective=REPLACE. This example shows:
- Full replacement (no merge function configured)
- Shallow merging via ConnectionConfig(merge_metadata=shallow_merge)
- A custom merge function
- Preparing a command and sending it yourself

Uses the same environment variables as example 01.
"""

import dataclasses
import os

from s3conn import BucketConnection, config_from_env, shallow_merge


def keep_history(current, update):
    """Merge that keeps the previous value of each changed key under '<key>-prev'."""
    merged = dict(current)
    for key, value in update.items():
        if key in current and current[key] != value:
            merged[f"{key}-prev"] = current[key]
        merged[key] = value
    return merged


def main():
    url = os.getenv("S3CONN_URL", "s3://s3conn-examples")
    base = config_from_env()
    key = "docs/report.md"

    replacing = BucketConnection.from_url(url, config=base, strict=True)
    replacing.put(key, "# Report", content_type="text/markdown", metadata={"owner": "ada"})

    print("replace:", replacing.put_head(key, {"stage": "draft"}))

    merging = BucketConnection.from_url(
        url, config=dataclasses.replace(base, merge_metadata=shallow_merge), strict=True
    )
    print("merge:", merging.put_head(key, {"owner": "grace", "reviewed": True}))
    print("merge, removing a key:", merging.put_head(key, {"reviewed": None}))

    historian = BucketConnection.from_url(
        url, config=dataclasses.replace(base, merge_metadata=keep_history), strict=True
    )
    print("custom merge:", historian.put_head(key, {"stage": "final"}))

    # Commands can be prepared, adjusted and sent explicitly
    command = replacing.get_command(key).with_params(Range="bytes=0-1")
    print("first two bytes:", BucketConnection.body_to_str(replacing.send(command)["Body"]))
    print("content type kept:", replacing.head(key).content_type)

    replacing.delete(key)


if __name__ == "__main__":
    main()
