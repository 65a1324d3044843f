"""Builders for the documented signing examples and canned service replies."""

from ossig import Config, Credentials, SignableRequest

ACCESS_KEY_ID = '44CF9590006BF252F707'
SECRET_ACCESS_KEY = 'OtxrzxIsfpFjA7SwPzILwy8Bw21TLhquhboDYROV'


def credentials() -> Credentials:
    return Credentials(ACCESS_KEY_ID, SECRET_ACCESS_KEY)


def config(**overrides) -> Config:
    return Config(credentials(), **overrides)


# Example 1: header authentication of a PUT with metadata headers.

EXAMPLE1_DATE = 'Thu, 17 Nov 2005 18:49:58 GMT'
EXAMPLE1_CANONICAL_STRING = (
    "PUT\nc8fdb181845a4ca6b8fec737b3581d76\ntext/html\nThu, 17 Nov 2005 18:49:58 GMT\n"
    "x-oss-magic:abracadabra\nx-oss-meta-author:foo@bar.com\n/quotes/nelson"
)
EXAMPLE1_SIGNATURE = '63mwfl+zYIOG6k95yxbgMruQ6QI='
EXAMPLE1_AUTHORIZATION = 'OSS 44CF9590006BF252F707:63mwfl+zYIOG6k95yxbgMruQ6QI='


def example1_headers() -> dict:
    return {
        'Content-Md5': 'c8fdb181845a4ca6b8fec737b3581d76',
        'Content-Type': 'text/html',
        'Date': EXAMPLE1_DATE,
        'X-OSS-Meta-Author': 'foo@bar.com',
        'X-OSS-Magic': 'abracadabra',
    }


def example1_request() -> SignableRequest:
    return SignableRequest('PUT', '/quotes/nelson', example1_headers())


# Example 3: pre-signed GET, one minute after 'Thu Mar  9 01:24:20 CST 2006'.

EXAMPLE3_FROZEN_TIME = '2006-03-09 07:24:20'
EXAMPLE3_EXPIRES = 1141889120
EXAMPLE3_CANONICAL_STRING = "GET\n\n\n1141889120\n/quotes/nelson"
EXAMPLE3_QUERY_STRING = (
    'OSSAccessKeyId=44CF9590006BF252F707&Expires=1141889120&Signature=vjbyPxybdZaNmGa%2ByT272YEAiv4%3D'
)


def example3_request() -> SignableRequest:
    return SignableRequest('GET', '/quotes/nelson', {'Date': 'Thu Mar  9 01:24:20 CST 2006'},
                           expires=EXAMPLE3_EXPIRES)


LIST_BUCKETS_XML = b"""<?xml version="1.0" encoding="UTF-8"?>
<ListAllMyBucketsResult xmlns="http://doc.oss.aliyuncs.com">
  <Owner>
    <ID>bcaf1ffd86f41caff1a493dc2ad8c2c281e37522a640e161ca5fb16fd081034f</ID>
    <DisplayName>webfile</DisplayName>
  </Owner>
  <Buckets>
    <Bucket>
      <Name>quotes</Name>
      <CreationDate>2006-02-03T16:45:09.000Z</CreationDate>
    </Bucket>
    <Bucket>
      <Name>samples</Name>
      <CreationDate>2006-02-03T16:41:58.000Z</CreationDate>
    </Bucket>
  </Buckets>
</ListAllMyBucketsResult>"""


def list_objects_xml(keys, truncated=False, prefixes=(), marker='', next_marker=None) -> bytes:
    contents = ''.join(
        f"<Contents><Key>{key}</Key><LastModified>2006-01-01T12:00:00.000Z</LastModified>"
        f"<ETag>&quot;828ef3fdfa96f00ad9f27c383fc9ac7f&quot;</ETag><Size>5</Size>"
        f"<StorageClass>STANDARD</StorageClass></Contents>"
        for key in keys
    )
    common = ''.join(f"<CommonPrefixes><Prefix>{prefix}</Prefix></CommonPrefixes>" for prefix in prefixes)
    next_tag = f"<NextMarker>{next_marker}</NextMarker>" if next_marker else ''
    return (
        '<?xml version="1.0" encoding="UTF-8"?>'
        '<ListBucketResult xmlns="http://doc.oss.aliyuncs.com">'
        f'<Name>quotes</Name><Prefix></Prefix><Marker>{marker}</Marker><MaxKeys>100</MaxKeys>'
        f'<IsTruncated>{"true" if truncated else "false"}</IsTruncated>'
        f'{next_tag}'
        f'{contents}{common}</ListBucketResult>'
    ).encode('utf-8')


def error_xml(code: str, message: str, resource: str = '') -> bytes:
    return (
        '<?xml version="1.0" encoding="UTF-8"?>'
        f'<Error><Code>{code}</Code><Message>{message}</Message><Resource>{resource}</Resource>'
        '<RequestId>28F6A2CD5E3B7E9A</RequestId><HostId>oss.aliyuncs.com</HostId></Error>'
    ).encode('utf-8')
