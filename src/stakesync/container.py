from dependency_injector import containers, providers

from stakesync.config import Settings
from stakesync.domain.enums import ReadErrorPolicy
from stakesync.infra.address import Bech32AddressCodec
from stakesync.infra.gateway.rest_client import GatewayRestClient
from stakesync.infra.http.rate_limited_client import RateLimitedClient
from stakesync.infra.search.es_client import ElasticStoreClient
from stakesync.pipeline.orchestrator import ReindexPipeline
from stakesync.sources.delegation_manager import DelegationManagerSource
from stakesync.sources.legacy_delegation import LegacyDelegationSource
from stakesync.sources.lkmex_staking import LKMexStakingSource
from stakesync.sources.validators import ValidatorsSource
from stakesync.store.account_reader import AccountStoreReader
from stakesync.store.bulk_indexer import BulkIndexer
from stakesync.store.cloner import IndexCloner


def read_error_policy(skip_failed_batches: bool) -> ReadErrorPolicy:
    return ReadErrorPolicy.SKIP if skip_failed_batches else ReadErrorPolicy.ABORT


class Container(containers.DeclarativeContainer):
    settings = providers.Singleton(Settings)

    http_client = providers.Singleton(
        RateLimitedClient,
        rate_per_second=settings.provided.http_rate_per_second,
        timeout=settings.provided.http_timeout,
    )

    gateway = providers.Singleton(
        GatewayRestClient,
        base_url=settings.provided.api_url,
        http_client=http_client,
    )

    store = providers.Singleton(
        ElasticStoreClient,
        base_url=settings.provided.es_url,
        http_client=http_client,
        auth=settings.provided.es_credentials,
    )

    address_codec = providers.Singleton(
        Bech32AddressCodec,
        hrp=settings.provided.address_hrp,
        length=settings.provided.address_length,
    )

    stake_sources = providers.List(
        providers.Factory(
            LegacyDelegationSource,
            rest=gateway,
            codec=address_codec,
            contract_address=settings.provided.delegation_legacy_contract_address,
        ),
        providers.Factory(
            ValidatorsSource,
            rest=gateway,
            auth=settings.provided.api_credentials,
        ),
        providers.Factory(
            DelegationManagerSource,
            rest=gateway,
            auth=settings.provided.api_credentials,
        ),
        providers.Factory(
            LKMexStakingSource,
            rest=gateway,
            codec=address_codec,
            contract_address=settings.provided.lkmex_staking_contract_address,
        ),
    )

    account_reader = providers.Factory(
        AccountStoreReader,
        store=store,
        index=settings.provided.accounts_index,
        batch_size=settings.provided.fetch_batch_size,
        on_error=providers.Callable(read_error_policy, settings.provided.skip_failed_read_batches),
    )

    cloner = providers.Factory(IndexCloner, store=store)

    bulk_indexer = providers.Factory(
        BulkIndexer,
        store=store,
        batch_size=settings.provided.bulk_batch_size,
    )

    pipeline = providers.Factory(
        ReindexPipeline,
        sources=stake_sources,
        reader=account_reader,
        cloner=cloner,
        indexer=bulk_indexer,
        source_index=settings.provided.accounts_index,
        timeout=settings.provided.run_timeout,
    )
