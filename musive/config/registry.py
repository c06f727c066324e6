"""Built-in feed registry."""

from musive.config.schemas.sources import SourceConfig, SourcesConfig


DEFAULT_SOURCES: tuple[SourceConfig, ...] = (
    SourceConfig(id="billboard", name="Billboard", url="https://www.billboard.com/feed/"),
    SourceConfig(
        id="rolling-stone",
        name="Rolling Stone",
        url="https://www.rollingstone.com/music/music-news/feed/",
    ),
    SourceConfig(id="nme", name="NME", url="https://www.nme.com/feed"),
    SourceConfig(
        id="pitchfork", name="Pitchfork", url="https://pitchfork.com/feed/feed-news/rss"
    ),
    SourceConfig(
        id="variety-music", name="Variety Music", url="https://variety.com/c/music/feed/"
    ),
)


def default_sources_config() -> SourcesConfig:
    """Return the built-in registry as a SourcesConfig."""
    return SourcesConfig(sources=list(DEFAULT_SOURCES))
