import os
from datetime import datetime

import boto3
from botocore.exceptions import ClientError
from boto3.dynamodb.conditions import Key
from fastapi import HTTPException
from models import *
from utils import logging

AWS_REGION = os.getenv("AWS_REGION", "us-east-1")

dynamodb = boto3.resource("dynamodb", region_name=AWS_REGION)
archive_table_name = os.getenv("ARCHIVE_TABLE", "wordforthis_archive")
archive_table = dynamodb.Table(archive_table_name)


def convert_to_result(item):
    return WordResult(
        word=item["display_word"],
        pronunciation=item.get("pronunciation", ""),
        origin=item.get("origin") or "Unknown origin",
        definition=item["definition"],
        timestamp=datetime.fromisoformat(item["timestamp"]),
        query=item.get("query"),
    )


def convert_result_to_item(user_id: str, result: WordResult):
    item = {
        "user_id": user_id,
        "word": result.word.lower(),  # Case-insensitive key
        "display_word": result.word,
        "pronunciation": result.pronunciation,
        "origin": result.origin,
        "definition": result.definition,
        "timestamp": result.timestamp.isoformat(),
    }
    if result.query is not None:
        item["query"] = result.query
    return item


def get_entries(user_id: str):
    logging.info(f"Getting archive for user {user_id}")

    try:
        response = archive_table.query(
            KeyConditionExpression=Key("user_id").eq(user_id)
        )
        items = response.get("Items", [])
        results = [convert_to_result(item) for item in items]
        results.sort(key=lambda r: r.timestamp, reverse=True)  # Newest first

        logging.info(f"Retrieved {len(results)} archived words for user {user_id}")
        return results
    except ClientError as e:
        logging.error(f"Error retrieving archive: {str(e)}")
        raise HTTPException(status_code=500, detail="Error retrieving archive")


def add_entry(user_id: str, result: WordResult):
    logging.info(f"Archiving word {user_id} - {result.word}")

    try:
        archive_table.put_item(
            Item=convert_result_to_item(user_id, result),
            ConditionExpression="attribute_not_exists(user_id) AND attribute_not_exists(word)"
        )
    except ClientError as e:
        if e.response["Error"]["Code"] == "ConditionalCheckFailedException":
            logging.info(f"Word {result.word} already archived, skipping")
        else:
            logging.error(f"Error archiving word: {str(e)}")
            raise HTTPException(status_code=500, detail="Error archiving word")

    return get_entries(user_id)


def clear_entries(user_id: str):
    logging.info(f"Clearing archive for user {user_id}")

    response = archive_table.query(
        KeyConditionExpression=Key("user_id").eq(user_id)
    )
    items_to_delete = response.get("Items", [])

    try:
        with archive_table.batch_writer() as batch:
            for item in items_to_delete:
                batch.delete_item(
                    Key={
                        "user_id": item["user_id"],
                        "word": item["word"]
                    }
                )

        return {"deleted": len(items_to_delete)}
    except ClientError as e:
        logging.error(f"Error clearing archive: {str(e)}")
        raise HTTPException(status_code=500, detail="Error clearing archive")
