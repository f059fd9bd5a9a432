"""Decoded response models.

Every model is a frozen dataclass: a read-only snapshot built once per call.
Collections are tuples in server order and are empty (never None) when the
server sent nothing. Field names follow the wire names.

Unified entities (Artist, Album, Song, Starred, AlbumList, ArtistInfo,
AlbumInfo, ...) are what callers receive regardless of which endpoint
generation answered. The Legacy* models describe the older endpoint shapes
and only exist between decoding and adaptation. Child also appears in
folder-based browsing (getIndexes, getMusicDirectory), which has no ID3
counterpart.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Optional, Tuple

STATUS_OK = "ok"
STATUS_FAILED = "failed"


@dataclass(frozen=True)
class SubsonicErrorInfo:
    """Error node of a failed response."""

    code: int = 0
    message: str = ""


@dataclass(frozen=True)
class SubsonicEnvelope:
    """Status/version/error wrapper common to every response.

    Attributes:
        status: "ok" or "failed"
        version: Protocol version the server reported for this response
        error: Populated if and only if status is "failed"
        payload: Decoded payload; None when failed or for payload-less calls
        type: OpenSubsonic server type (e.g. "navidrome")
        serverVersion: OpenSubsonic server software version
        openSubsonic: True when the server advertises OpenSubsonic support
    """

    status: str
    version: str
    error: Optional[SubsonicErrorInfo] = None
    payload: Any = None
    type: Optional[str] = None
    serverVersion: Optional[str] = None
    openSubsonic: bool = False

    @property
    def is_ok(self) -> bool:
        return self.status == STATUS_OK


# ============================================================================
# Unified entities
# ============================================================================


@dataclass(frozen=True)
class Song:
    """A song (file entry) with every field either generation can carry."""

    id: str
    title: str = ""
    parent: Optional[str] = None
    isDir: bool = False
    album: str = ""
    artist: str = ""
    track: Optional[int] = None
    year: Optional[int] = None
    genre: Optional[str] = None
    coverArt: Optional[str] = None
    size: int = 0
    contentType: Optional[str] = None
    suffix: Optional[str] = None
    transcodedContentType: Optional[str] = None
    transcodedSuffix: Optional[str] = None
    duration: int = 0
    bitRate: int = 0
    path: Optional[str] = None
    isVideo: bool = False
    userRating: Optional[int] = None
    averageRating: Optional[float] = None
    playCount: Optional[int] = None
    discNumber: Optional[int] = None
    created: Optional[datetime] = None
    starred: Optional[datetime] = None
    albumId: Optional[str] = None
    artistId: Optional[str] = None
    type: str = ""
    bpm: int = 0
    musicBrainzId: Optional[str] = None


@dataclass(frozen=True)
class Album:
    """An ID3 album. ``songs`` is only populated by getAlbum."""

    id: str
    name: str = ""
    artist: str = ""
    artistId: str = ""
    coverArt: Optional[str] = None
    songCount: int = 0
    duration: int = 0
    playCount: Optional[int] = None
    created: Optional[datetime] = None
    starred: Optional[datetime] = None
    year: Optional[int] = None
    genre: Optional[str] = None
    songs: Tuple[Song, ...] = ()


@dataclass(frozen=True)
class Artist:
    """An ID3 artist. ``albums`` is only populated by getArtist."""

    id: str
    name: str = ""
    coverArt: Optional[str] = None
    albumCount: int = 0
    artistImageUrl: Optional[str] = None
    starred: Optional[datetime] = None
    albums: Tuple[Album, ...] = ()


@dataclass(frozen=True)
class Starred:
    """Starred artists, albums and songs."""

    artists: Tuple[Artist, ...] = ()
    albums: Tuple[Album, ...] = ()
    songs: Tuple[Song, ...] = ()


@dataclass(frozen=True)
class AlbumList:
    """One page of an album listing."""

    albums: Tuple[Album, ...] = ()


@dataclass(frozen=True)
class ArtistInfo:
    """Biography, images and similar artists for an artist."""

    biography: str = ""
    musicBrainzId: str = ""
    lastFmUrl: str = ""
    smallImageUrl: str = ""
    mediumImageUrl: str = ""
    largeImageUrl: str = ""
    similarArtists: Tuple[Artist, ...] = ()


@dataclass(frozen=True)
class AlbumInfo:
    """Notes and images for an album."""

    notes: str = ""
    musicBrainzId: str = ""
    lastFmUrl: str = ""
    smallImageUrl: str = ""
    mediumImageUrl: str = ""
    largeImageUrl: str = ""


@dataclass(frozen=True)
class MusicFolder:
    id: str
    name: str = ""


@dataclass(frozen=True)
class Genre:
    value: str
    songCount: int = 0
    albumCount: int = 0


@dataclass(frozen=True)
class ArtistIndex:
    """Artists grouped under one index letter."""

    name: str
    artists: Tuple[Artist, ...] = ()


@dataclass(frozen=True)
class ArtistsIndex:
    """getArtists payload."""

    ignoredArticles: str = ""
    indexes: Tuple[ArtistIndex, ...] = ()

    @property
    def artists(self) -> Tuple[Artist, ...]:
        """All artists across every index, in server order."""
        return tuple(artist for index in self.indexes for artist in index.artists)


@dataclass(frozen=True)
class SearchResult:
    """search3 payload."""

    artists: Tuple[Artist, ...] = ()
    albums: Tuple[Album, ...] = ()
    songs: Tuple[Song, ...] = ()


@dataclass(frozen=True)
class Playlist:
    """A playlist. ``entries`` is only populated by getPlaylist."""

    id: str
    name: str = ""
    comment: Optional[str] = None
    owner: Optional[str] = None
    public: bool = False
    songCount: int = 0
    duration: int = 0
    created: Optional[datetime] = None
    changed: Optional[datetime] = None
    coverArt: Optional[str] = None
    entries: Tuple[Song, ...] = ()


@dataclass(frozen=True)
class ScanStatus:
    scanning: bool = False
    count: int = 0


@dataclass(frozen=True)
class License:
    """getLicense payload."""

    valid: bool = False
    email: Optional[str] = None
    licenseExpires: Optional[datetime] = None
    trialExpires: Optional[datetime] = None


@dataclass(frozen=True)
class Lyrics:
    artist: Optional[str] = None
    title: Optional[str] = None
    value: str = ""


@dataclass(frozen=True)
class Bookmark:
    """A saved playback position. ``position`` is in milliseconds."""

    entry: Song
    position: int = 0
    username: str = ""
    comment: Optional[str] = None
    created: Optional[datetime] = None
    changed: Optional[datetime] = None


@dataclass(frozen=True)
class PlayQueue:
    """getPlayQueue payload; empty when the user saved no queue."""

    current: Optional[str] = None
    position: int = 0
    username: str = ""
    changed: Optional[datetime] = None
    changedBy: Optional[str] = None
    entries: Tuple[Song, ...] = ()


# ============================================================================
# Legacy endpoint shapes
# ============================================================================


@dataclass(frozen=True)
class Child:
    """Directory entry as returned by getStarred, getAlbumList and getMusicDirectory.

    Albums appear as directory entries (``isDir`` true, name in ``title``);
    songs as file entries. Text fields the legacy generation may omit are
    nullable here.
    """

    id: str
    parent: Optional[str] = None
    isDir: bool = False
    title: str = ""
    album: Optional[str] = None
    artist: Optional[str] = None
    track: Optional[int] = None
    year: Optional[int] = None
    genre: Optional[str] = None
    coverArt: Optional[str] = None
    size: int = 0
    contentType: Optional[str] = None
    suffix: Optional[str] = None
    transcodedContentType: Optional[str] = None
    transcodedSuffix: Optional[str] = None
    duration: int = 0
    bitRate: int = 0
    path: Optional[str] = None
    isVideo: bool = False
    userRating: Optional[int] = None
    averageRating: Optional[float] = None
    playCount: Optional[int] = None
    discNumber: Optional[int] = None
    created: Optional[datetime] = None
    starred: Optional[datetime] = None
    albumId: Optional[str] = None
    artistId: Optional[str] = None


@dataclass(frozen=True)
class LegacyArtist:
    """Artist reference from getStarred / getArtistInfo."""

    id: str
    name: str = ""
    coverArt: Optional[str] = None
    albumCount: int = 0
    artistImageUrl: Optional[str] = None


@dataclass(frozen=True)
class LegacyStarred:
    artists: Tuple[LegacyArtist, ...] = ()
    albums: Tuple[Child, ...] = ()
    songs: Tuple[Child, ...] = ()


@dataclass(frozen=True)
class LegacyAlbumList:
    albums: Tuple[Child, ...] = ()


@dataclass(frozen=True)
class LegacyArtistInfo:
    biography: Optional[str] = None
    musicBrainzId: Optional[str] = None
    lastFmUrl: Optional[str] = None
    smallImageUrl: Optional[str] = None
    mediumImageUrl: Optional[str] = None
    largeImageUrl: Optional[str] = None
    similarArtists: Tuple[LegacyArtist, ...] = ()


@dataclass(frozen=True)
class LegacyAlbumInfo:
    notes: Optional[str] = None
    musicBrainzId: Optional[str] = None
    lastFmUrl: Optional[str] = None
    smallImageUrl: Optional[str] = None
    mediumImageUrl: Optional[str] = None
    largeImageUrl: Optional[str] = None


# ============================================================================
# Folder-based browsing
# ============================================================================


@dataclass(frozen=True)
class Indexes:
    """getIndexes payload: top-level folder entries grouped by letter.

    ``children`` holds files sitting directly in the music folder root.
    """

    lastModified: Optional[datetime] = None
    ignoredArticles: str = ""
    indexes: Tuple[ArtistIndex, ...] = ()
    shortcuts: Tuple[Artist, ...] = ()
    children: Tuple[Child, ...] = ()

    @property
    def artists(self) -> Tuple[Artist, ...]:
        return tuple(artist for index in self.indexes for artist in index.artists)


@dataclass(frozen=True)
class MusicDirectory:
    """getMusicDirectory payload: a folder and its entries."""

    id: str
    name: str = ""
    parent: Optional[str] = None
    starred: Optional[datetime] = None
    userRating: Optional[int] = None
    averageRating: Optional[float] = None
    playCount: Optional[int] = None
    children: Tuple[Child, ...] = ()
