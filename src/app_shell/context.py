from __future__ import annotations

from dataclasses import dataclass

from src.adapters.bitly import BitlyClient, UnconfiguredShortener
from src.adapters.sqlite.repos import SQLiteMetaStore, SQLitePostRepo
from src.components.social_share import (
    AssetRegistryPort,
    InternalRequestInvoker,
    LinkGenerationService,
    MetaboxRegistryPort,
    ShareMeta,
    SocialShare,
)
from src.core.events import EventDispatcher
from src.ports.repo import MetaStorePort, PostRepoPort
from src.ports.shortener import ShortenerPort
from src.rules.models import Rules
from src.services.publish import PublishService


@dataclass
class ServiceContext:
    rules: Rules
    dispatcher: EventDispatcher
    post_repo: PostRepoPort
    meta: ShareMeta
    link_service: LinkGenerationService
    social_share: SocialShare
    publish_service: PublishService
    shortener: ShortenerPort
    registered: bool

    @classmethod
    def create(
        cls,
        rules: Rules,
        site_id: int,
        post_repo: PostRepoPort,
        meta_store: MetaStorePort,
        shortener: ShortenerPort,
        assets: AssetRegistryPort | None = None,
        metaboxes: MetaboxRegistryPort | None = None,
    ) -> ServiceContext:
        dispatcher = EventDispatcher()
        meta = ShareMeta(meta_store, prefix=rules.meta_prefix)
        link_service = LinkGenerationService(meta=meta, shortener=shortener, rules=rules)

        social_share = SocialShare(
            rules=rules,
            meta=meta,
            invoker=InternalRequestInvoker(link_service),
            assets=assets,
            metaboxes=metaboxes,
        )
        registered = social_share.register(dispatcher, site_id)

        return cls(
            rules=rules,
            dispatcher=dispatcher,
            post_repo=post_repo,
            meta=meta,
            link_service=link_service,
            social_share=social_share,
            publish_service=PublishService(post_repo, dispatcher),
            shortener=shortener,
            registered=registered,
        )

    @classmethod
    def from_db(cls, db_path: str, rules: Rules, site_id: int) -> ServiceContext:
        shortener: ShortenerPort | None = BitlyClient.from_rules(rules.shortener)
        if shortener is None:
            shortener = UnconfiguredShortener(f"{rules.shortener.token_env} is not set")

        return cls.create(
            rules=rules,
            site_id=site_id,
            post_repo=SQLitePostRepo(db_path),
            meta_store=SQLiteMetaStore(db_path),
            shortener=shortener,
        )

    def close(self) -> None:
        """Release the HTTP client when the context owns one."""
        if isinstance(self.shortener, BitlyClient):
            self.shortener.close()
