import boto3

import config


def create_dynamodb_resource():
    """
    実行環境に応じたDynamoDBリソースを作成します。

    dev環境ではローカルのDynamoDB (DynamoDB Local) に固定の認証情報で接続し、
    それ以外の環境ではboto3のデフォルトの認証情報・リージョン設定を使用します。
    """
    if config.is_dev():
        return boto3.resource(
            "dynamodb",
            endpoint_url=config.DYNAMODB_ENDPOINT,
            region_name=config.AWS_REGION,
            aws_access_key_id=config.AWS_ACCESS_KEY_ID,
            aws_secret_access_key=config.AWS_SECRET_ACCESS_KEY,
        )
    return boto3.resource("dynamodb")
