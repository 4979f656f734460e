"""
Services Package - request compilation, cache keys, cache store, stream
assembly, and the completion client that orchestrates them.
"""

from streamcache.services.assembler import (
    StreamAssembler,
    append_chunk,
    assemble,
    backfill_tool_call_ids,
)
from streamcache.services.cache import (
    CacheStore,
    DisabledCacheStore,
    RedisCacheStore,
    create_cache_store,
    decode_chunks,
    encode_chunks,
    is_no_cache,
    no_cache,
)
from streamcache.services.cache_key import cache_key, cache_key_base, seed
from streamcache.services.compiler import (
    INTERNAL_SYSTEM_PROMPT,
    compile_messages,
    compile_request,
)
from streamcache.services.orchestrator import (
    COMPLETION_IDS,
    CompletionClient,
    StatusSink,
    TransactionCounter,
)

__all__ = [
    # Assembler
    "StreamAssembler",
    "append_chunk",
    "assemble",
    "backfill_tool_call_ids",
    # Cache
    "CacheStore",
    "DisabledCacheStore",
    "RedisCacheStore",
    "create_cache_store",
    "decode_chunks",
    "encode_chunks",
    "is_no_cache",
    "no_cache",
    # Keys
    "cache_key",
    "cache_key_base",
    "seed",
    # Compiler
    "INTERNAL_SYSTEM_PROMPT",
    "compile_messages",
    "compile_request",
    # Client
    "COMPLETION_IDS",
    "CompletionClient",
    "StatusSink",
    "TransactionCounter",
]
