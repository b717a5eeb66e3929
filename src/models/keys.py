"""
行キー (バイト列) とテキスト表現の相互変換。

キーはクエリパラメータやJSONレスポンス上では標準のbase64 (RFC 4648 §4,
パディングあり) で表現します。/list が出力した index の値は、そのまま
(URLエンコードした上で) /deactivate の index パラメータに渡せます。
"""
import base64
import binascii


class KeyDecodeError(ValueError):
    """index パラメータがbase64として解釈できない場合のエラー。"""


def encode_key(raw: bytes) -> str:
    return base64.b64encode(raw).decode("ascii")


def decode_key(text: str) -> bytes:
    try:
        return base64.b64decode(text.encode("ascii"), validate=True)
    except (binascii.Error, UnicodeEncodeError) as e:
        raise KeyDecodeError(f"index is not valid base64: {text!r}") from e
