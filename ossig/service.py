from typing import List, Optional

from .connection import Connection
from .objects import Bucket
from .parsers import parse_list_buckets

ACL_HEADER = 'x-oss-acl'


class Service:
    """
    All buckets owned by the connection's credentials.

    Behaves like a dictionary of :class:`~ossig.objects.Bucket` keyed by name.
    """

    def __init__(self, connection: Connection) -> None:
        self._conn = connection

    def list(self) -> List[Bucket]:
        response = self._conn.get()
        return [Bucket(entry.name, self._conn) for entry in parse_list_buckets(response.body)]

    def names(self) -> List[str]:
        return [bucket.name for bucket in self.list()]

    def get(self, name: str, default: Optional[Bucket] = None) -> Optional[Bucket]:
        if name in self.names():
            return Bucket(name, self._conn)
        return default

    def create(self, name: str, acl: Optional[str] = None) -> Bucket:
        headers = {ACL_HEADER: acl} if acl else None
        self._conn.put(name, headers=headers)
        return Bucket(name, self._conn)

    def delete(self, name: str) -> None:
        self._conn.delete(name)

    def __contains__(self, name: str) -> bool:
        return name in self.names()

    def __getitem__(self, name: str) -> Bucket:
        bucket = self.get(name)
        if bucket is None:
            raise KeyError(name)
        return bucket

    def __delitem__(self, name: str) -> None:
        self.delete(name)
