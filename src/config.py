import os

from dotenv import load_dotenv

load_dotenv()

# 実行環境 (dev の場合はローカルの DynamoDB に接続する)
ENVIRONMENT = os.environ.get("ENVIRONMENT") or "dev"

# DynamoDB configuration
DYNAMODB_ENDPOINT = os.environ.get("DYNAMODB_ENDPOINT", "http://localhost:8000")
AWS_REGION = os.environ.get("AWS_REGION", "us-west-2")
AWS_ACCESS_KEY_ID = os.environ.get("AWS_ACCESS_KEY_ID", "empty")
AWS_SECRET_ACCESS_KEY = os.environ.get("AWS_SECRET_ACCESS_KEY", "empty")

# Server configuration
HOST = os.environ.get("HOST", "0.0.0.0")
PORT = int(os.environ.get("PORT", "8000"))

DEBUG = os.getenv("DEBUG", "False").lower() in ("true", "1", "t")


def is_dev() -> bool:
    return ENVIRONMENT == "dev"
