"""Response decoding.

``decode_response`` turns a raw ``subsonic-response`` document into a
SubsonicEnvelope whose payload has the native shape of the endpoint that
produced it. Payload decoders are looked up in a registry keyed by
PayloadKind; each one reads its wire node through the decode-or-default
helpers in ``fields`` and never raises on missing or ill-typed fields.

A payload kind may list several wire keys. The first one present in the
response is used (servers disagree on whether getAlbumInfo2 answers with
``albumInfo2`` or ``albumInfo``).
"""

import json
import logging
from enum import Enum
from typing import Any, Callable, Dict, Mapping, NamedTuple, Tuple, Union

from .exceptions import SubsonicDecodeError
from .fields import (
    get_bool,
    get_datetime,
    get_int,
    get_list,
    get_node,
    get_optional_float,
    get_optional_int,
    get_optional_str,
    get_str,
)
from .responses import (
    STATUS_FAILED,
    STATUS_OK,
    Album,
    AlbumInfo,
    AlbumList,
    Artist,
    ArtistIndex,
    ArtistInfo,
    ArtistsIndex,
    Bookmark,
    Child,
    Genre,
    Indexes,
    LegacyAlbumInfo,
    LegacyAlbumList,
    LegacyArtist,
    LegacyArtistInfo,
    LegacyStarred,
    License,
    Lyrics,
    MusicDirectory,
    MusicFolder,
    PlayQueue,
    Playlist,
    ScanStatus,
    SearchResult,
    Song,
    Starred,
    SubsonicEnvelope,
    SubsonicErrorInfo,
)

logger = logging.getLogger(__name__)

ROOT_KEY = "subsonic-response"

RawResponse = Union[bytes, str, Mapping[str, Any]]


class PayloadKind(Enum):
    """Payload shapes the decoder knows how to read."""

    NONE = "none"
    MUSIC_FOLDERS = "musicFolders"
    GENRES = "genres"
    ARTISTS = "artists"
    ARTIST = "artist"
    ALBUM = "album"
    SONG = "song"
    RANDOM_SONGS = "randomSongs"
    SONGS_BY_GENRE = "songsByGenre"
    TOP_SONGS = "topSongs"
    SEARCH3 = "searchResult3"
    PLAYLISTS = "playlists"
    PLAYLIST = "playlist"
    SCAN_STATUS = "scanStatus"
    STARRED = "starred"
    STARRED2 = "starred2"
    ALBUM_LIST = "albumList"
    ALBUM_LIST2 = "albumList2"
    ARTIST_INFO = "artistInfo"
    ARTIST_INFO2 = "artistInfo2"
    ALBUM_INFO = "albumInfo"
    ALBUM_INFO2 = "albumInfo2"
    INDEXES = "indexes"
    MUSIC_DIRECTORY = "directory"
    LICENSE = "license"
    LYRICS = "lyrics"
    BOOKMARKS = "bookmarks"
    PLAY_QUEUE = "playQueue"


PayloadDecoder = Callable[[Mapping[str, Any]], Any]


class _Registration(NamedTuple):
    wire_keys: Tuple[str, ...]
    decode: PayloadDecoder


_DECODERS: Dict[PayloadKind, _Registration] = {}


def payload_decoder(kind: PayloadKind, *wire_keys: str):
    """Register the decoder for a payload kind.

    The decorated function receives the payload node (an empty mapping when
    the server omitted it) and returns the decoded payload.

    Args:
        kind: Payload kind being registered
        *wire_keys: Response keys holding the payload, in lookup order
    """

    def register(func: PayloadDecoder) -> PayloadDecoder:
        if kind in _DECODERS:
            raise ValueError(f"Decoder already registered for {kind}")
        _DECODERS[kind] = _Registration(tuple(wire_keys), func)
        return func

    return register


def registered_kinds() -> Tuple[PayloadKind, ...]:
    return tuple(_DECODERS)


# ============================================================================
# Entity decoders
# ============================================================================


def decode_song(node: Mapping[str, Any]) -> Song:
    """Decode a song from a modern (ID3) response."""
    return Song(
        id=get_str(node, "id"),
        title=get_str(node, "title"),
        parent=get_optional_str(node, "parent"),
        isDir=get_bool(node, "isDir"),
        album=get_str(node, "album"),
        artist=get_str(node, "artist"),
        track=get_optional_int(node, "track"),
        year=get_optional_int(node, "year"),
        genre=get_optional_str(node, "genre"),
        coverArt=get_optional_str(node, "coverArt"),
        size=get_int(node, "size"),
        contentType=get_optional_str(node, "contentType"),
        suffix=get_optional_str(node, "suffix"),
        transcodedContentType=get_optional_str(node, "transcodedContentType"),
        transcodedSuffix=get_optional_str(node, "transcodedSuffix"),
        duration=get_int(node, "duration"),
        bitRate=get_int(node, "bitRate"),
        path=get_optional_str(node, "path"),
        isVideo=get_bool(node, "isVideo"),
        userRating=get_optional_int(node, "userRating"),
        averageRating=get_optional_float(node, "averageRating"),
        playCount=get_optional_int(node, "playCount"),
        discNumber=get_optional_int(node, "discNumber"),
        created=get_datetime(node, "created"),
        starred=get_datetime(node, "starred"),
        albumId=get_optional_str(node, "albumId"),
        artistId=get_optional_str(node, "artistId"),
        type=get_str(node, "type"),
        bpm=get_int(node, "bpm"),
        musicBrainzId=get_optional_str(node, "musicBrainzId"),
    )


def decode_child(node: Mapping[str, Any]) -> Child:
    """Decode a directory entry from a legacy response."""
    return Child(
        id=get_str(node, "id"),
        parent=get_optional_str(node, "parent"),
        isDir=get_bool(node, "isDir"),
        title=get_str(node, "title"),
        album=get_optional_str(node, "album"),
        artist=get_optional_str(node, "artist"),
        track=get_optional_int(node, "track"),
        year=get_optional_int(node, "year"),
        genre=get_optional_str(node, "genre"),
        coverArt=get_optional_str(node, "coverArt"),
        size=get_int(node, "size"),
        contentType=get_optional_str(node, "contentType"),
        suffix=get_optional_str(node, "suffix"),
        transcodedContentType=get_optional_str(node, "transcodedContentType"),
        transcodedSuffix=get_optional_str(node, "transcodedSuffix"),
        duration=get_int(node, "duration"),
        bitRate=get_int(node, "bitRate"),
        path=get_optional_str(node, "path"),
        isVideo=get_bool(node, "isVideo"),
        userRating=get_optional_int(node, "userRating"),
        averageRating=get_optional_float(node, "averageRating"),
        playCount=get_optional_int(node, "playCount"),
        discNumber=get_optional_int(node, "discNumber"),
        created=get_datetime(node, "created"),
        starred=get_datetime(node, "starred"),
        albumId=get_optional_str(node, "albumId"),
        artistId=get_optional_str(node, "artistId"),
    )


def decode_album(node: Mapping[str, Any]) -> Album:
    return Album(
        id=get_str(node, "id"),
        name=get_str(node, "name"),
        artist=get_str(node, "artist"),
        artistId=get_str(node, "artistId"),
        coverArt=get_optional_str(node, "coverArt"),
        songCount=get_int(node, "songCount"),
        duration=get_int(node, "duration"),
        playCount=get_optional_int(node, "playCount"),
        created=get_datetime(node, "created"),
        starred=get_datetime(node, "starred"),
        year=get_optional_int(node, "year"),
        genre=get_optional_str(node, "genre"),
        songs=tuple(decode_song(song) for song in get_list(node, "song")),
    )


def decode_artist(node: Mapping[str, Any]) -> Artist:
    return Artist(
        id=get_str(node, "id"),
        name=get_str(node, "name"),
        coverArt=get_optional_str(node, "coverArt"),
        albumCount=get_int(node, "albumCount"),
        artistImageUrl=get_optional_str(node, "artistImageUrl"),
        starred=get_datetime(node, "starred"),
        albums=tuple(decode_album(album) for album in get_list(node, "album")),
    )


def decode_legacy_artist(node: Mapping[str, Any]) -> LegacyArtist:
    return LegacyArtist(
        id=get_str(node, "id"),
        name=get_str(node, "name"),
        coverArt=get_optional_str(node, "coverArt"),
        albumCount=get_int(node, "albumCount"),
        artistImageUrl=get_optional_str(node, "artistImageUrl"),
    )


def decode_playlist(node: Mapping[str, Any]) -> Playlist:
    return Playlist(
        id=get_str(node, "id"),
        name=get_str(node, "name"),
        comment=get_optional_str(node, "comment"),
        owner=get_optional_str(node, "owner"),
        public=get_bool(node, "public"),
        songCount=get_int(node, "songCount"),
        duration=get_int(node, "duration"),
        created=get_datetime(node, "created"),
        changed=get_datetime(node, "changed"),
        coverArt=get_optional_str(node, "coverArt"),
        entries=tuple(decode_song(entry) for entry in get_list(node, "entry")),
    )


def _songs(node: Mapping[str, Any]) -> Tuple[Song, ...]:
    return tuple(decode_song(song) for song in get_list(node, "song"))


# ============================================================================
# Payload decoders
# ============================================================================


@payload_decoder(PayloadKind.NONE)
def _decode_nothing(node: Mapping[str, Any]):
    return None


@payload_decoder(PayloadKind.MUSIC_FOLDERS, "musicFolders")
def _decode_music_folders(node: Mapping[str, Any]):
    return tuple(
        MusicFolder(id=get_str(folder, "id"), name=get_str(folder, "name"))
        for folder in get_list(node, "musicFolder")
    )


@payload_decoder(PayloadKind.GENRES, "genres")
def _decode_genres(node: Mapping[str, Any]):
    return tuple(
        Genre(
            value=get_str(genre, "value"),
            songCount=get_int(genre, "songCount"),
            albumCount=get_int(genre, "albumCount"),
        )
        for genre in get_list(node, "genre")
    )


@payload_decoder(PayloadKind.ARTISTS, "artists")
def _decode_artists(node: Mapping[str, Any]):
    indexes = tuple(
        ArtistIndex(
            name=get_str(index, "name"),
            artists=tuple(decode_artist(artist) for artist in get_list(index, "artist")),
        )
        for index in get_list(node, "index")
    )
    return ArtistsIndex(ignoredArticles=get_str(node, "ignoredArticles"), indexes=indexes)


@payload_decoder(PayloadKind.ARTIST, "artist")
def _decode_artist_payload(node: Mapping[str, Any]):
    return decode_artist(node)


@payload_decoder(PayloadKind.ALBUM, "album")
def _decode_album_payload(node: Mapping[str, Any]):
    return decode_album(node)


@payload_decoder(PayloadKind.SONG, "song")
def _decode_song_payload(node: Mapping[str, Any]):
    return decode_song(node)


@payload_decoder(PayloadKind.RANDOM_SONGS, "randomSongs")
def _decode_random_songs(node: Mapping[str, Any]):
    return _songs(node)


@payload_decoder(PayloadKind.SONGS_BY_GENRE, "songsByGenre")
def _decode_songs_by_genre(node: Mapping[str, Any]):
    return _songs(node)


@payload_decoder(PayloadKind.TOP_SONGS, "topSongs")
def _decode_top_songs(node: Mapping[str, Any]):
    return _songs(node)


@payload_decoder(PayloadKind.SEARCH3, "searchResult3")
def _decode_search3(node: Mapping[str, Any]):
    return SearchResult(
        artists=tuple(decode_artist(artist) for artist in get_list(node, "artist")),
        albums=tuple(decode_album(album) for album in get_list(node, "album")),
        songs=_songs(node),
    )


@payload_decoder(PayloadKind.PLAYLISTS, "playlists")
def _decode_playlists(node: Mapping[str, Any]):
    return tuple(decode_playlist(playlist) for playlist in get_list(node, "playlist"))


@payload_decoder(PayloadKind.PLAYLIST, "playlist")
def _decode_playlist_payload(node: Mapping[str, Any]):
    return decode_playlist(node)


@payload_decoder(PayloadKind.SCAN_STATUS, "scanStatus")
def _decode_scan_status(node: Mapping[str, Any]):
    return ScanStatus(scanning=get_bool(node, "scanning"), count=get_int(node, "count"))


@payload_decoder(PayloadKind.STARRED, "starred")
def _decode_starred(node: Mapping[str, Any]):
    return LegacyStarred(
        artists=tuple(decode_legacy_artist(artist) for artist in get_list(node, "artist")),
        albums=tuple(decode_child(album) for album in get_list(node, "album")),
        songs=tuple(decode_child(song) for song in get_list(node, "song")),
    )


@payload_decoder(PayloadKind.STARRED2, "starred2")
def _decode_starred2(node: Mapping[str, Any]):
    return Starred(
        artists=tuple(decode_artist(artist) for artist in get_list(node, "artist")),
        albums=tuple(decode_album(album) for album in get_list(node, "album")),
        songs=_songs(node),
    )


@payload_decoder(PayloadKind.ALBUM_LIST, "albumList")
def _decode_album_list(node: Mapping[str, Any]):
    return LegacyAlbumList(albums=tuple(decode_child(album) for album in get_list(node, "album")))


@payload_decoder(PayloadKind.ALBUM_LIST2, "albumList2")
def _decode_album_list2(node: Mapping[str, Any]):
    return AlbumList(albums=tuple(decode_album(album) for album in get_list(node, "album")))


@payload_decoder(PayloadKind.ARTIST_INFO, "artistInfo")
def _decode_artist_info(node: Mapping[str, Any]):
    return LegacyArtistInfo(
        biography=get_optional_str(node, "biography"),
        musicBrainzId=get_optional_str(node, "musicBrainzId"),
        lastFmUrl=get_optional_str(node, "lastFmUrl"),
        smallImageUrl=get_optional_str(node, "smallImageUrl"),
        mediumImageUrl=get_optional_str(node, "mediumImageUrl"),
        largeImageUrl=get_optional_str(node, "largeImageUrl"),
        similarArtists=tuple(
            decode_legacy_artist(artist) for artist in get_list(node, "similarArtist")
        ),
    )


@payload_decoder(PayloadKind.ARTIST_INFO2, "artistInfo2", "artistInfo")
def _decode_artist_info2(node: Mapping[str, Any]):
    return ArtistInfo(
        biography=get_str(node, "biography"),
        musicBrainzId=get_str(node, "musicBrainzId"),
        lastFmUrl=get_str(node, "lastFmUrl"),
        smallImageUrl=get_str(node, "smallImageUrl"),
        mediumImageUrl=get_str(node, "mediumImageUrl"),
        largeImageUrl=get_str(node, "largeImageUrl"),
        similarArtists=tuple(decode_artist(artist) for artist in get_list(node, "similarArtist")),
    )


@payload_decoder(PayloadKind.ALBUM_INFO, "albumInfo")
def _decode_album_info(node: Mapping[str, Any]):
    return LegacyAlbumInfo(
        notes=get_optional_str(node, "notes"),
        musicBrainzId=get_optional_str(node, "musicBrainzId"),
        lastFmUrl=get_optional_str(node, "lastFmUrl"),
        smallImageUrl=get_optional_str(node, "smallImageUrl"),
        mediumImageUrl=get_optional_str(node, "mediumImageUrl"),
        largeImageUrl=get_optional_str(node, "largeImageUrl"),
    )


@payload_decoder(PayloadKind.ALBUM_INFO2, "albumInfo2", "albumInfo")
def _decode_album_info2(node: Mapping[str, Any]):
    return AlbumInfo(
        notes=get_str(node, "notes"),
        musicBrainzId=get_str(node, "musicBrainzId"),
        lastFmUrl=get_str(node, "lastFmUrl"),
        smallImageUrl=get_str(node, "smallImageUrl"),
        mediumImageUrl=get_str(node, "mediumImageUrl"),
        largeImageUrl=get_str(node, "largeImageUrl"),
    )


@payload_decoder(PayloadKind.INDEXES, "indexes")
def _decode_indexes(node: Mapping[str, Any]):
    indexes = tuple(
        ArtistIndex(
            name=get_str(index, "name"),
            artists=tuple(decode_artist(artist) for artist in get_list(index, "artist")),
        )
        for index in get_list(node, "index")
    )
    return Indexes(
        lastModified=get_datetime(node, "lastModified"),
        ignoredArticles=get_str(node, "ignoredArticles"),
        indexes=indexes,
        shortcuts=tuple(decode_artist(artist) for artist in get_list(node, "shortcut")),
        children=tuple(decode_child(child) for child in get_list(node, "child")),
    )


@payload_decoder(PayloadKind.MUSIC_DIRECTORY, "directory")
def _decode_music_directory(node: Mapping[str, Any]):
    return MusicDirectory(
        id=get_str(node, "id"),
        name=get_str(node, "name"),
        parent=get_optional_str(node, "parent"),
        starred=get_datetime(node, "starred"),
        userRating=get_optional_int(node, "userRating"),
        averageRating=get_optional_float(node, "averageRating"),
        playCount=get_optional_int(node, "playCount"),
        children=tuple(decode_child(child) for child in get_list(node, "child")),
    )


@payload_decoder(PayloadKind.LICENSE, "license")
def _decode_license(node: Mapping[str, Any]):
    return License(
        valid=get_bool(node, "valid"),
        email=get_optional_str(node, "email"),
        licenseExpires=get_datetime(node, "licenseExpires"),
        trialExpires=get_datetime(node, "trialExpires"),
    )


@payload_decoder(PayloadKind.LYRICS, "lyrics")
def _decode_lyrics(node: Mapping[str, Any]):
    return Lyrics(
        artist=get_optional_str(node, "artist"),
        title=get_optional_str(node, "title"),
        value=get_str(node, "value"),
    )


@payload_decoder(PayloadKind.BOOKMARKS, "bookmarks")
def _decode_bookmarks(node: Mapping[str, Any]):
    return tuple(
        Bookmark(
            entry=decode_song(get_node(bookmark, "entry")),
            position=get_int(bookmark, "position"),
            username=get_str(bookmark, "username"),
            comment=get_optional_str(bookmark, "comment"),
            created=get_datetime(bookmark, "created"),
            changed=get_datetime(bookmark, "changed"),
        )
        for bookmark in get_list(node, "bookmark")
    )


@payload_decoder(PayloadKind.PLAY_QUEUE, "playQueue")
def _decode_play_queue(node: Mapping[str, Any]):
    return PlayQueue(
        current=get_optional_str(node, "current"),
        position=get_int(node, "position"),
        username=get_str(node, "username"),
        changed=get_datetime(node, "changed"),
        changedBy=get_optional_str(node, "changedBy"),
        entries=tuple(decode_song(entry) for entry in get_list(node, "entry")),
    )


# ============================================================================
# Envelope
# ============================================================================


def _load_document(raw: RawResponse) -> Mapping[str, Any]:
    if isinstance(raw, Mapping):
        return raw

    if isinstance(raw, (bytes, bytearray)):
        try:
            raw = raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise SubsonicDecodeError(f"Response is not valid UTF-8: {e}") from e

    if not isinstance(raw, str):
        raise SubsonicDecodeError(f"Unsupported response type: {type(raw).__name__}")

    try:
        document = json.loads(raw)
    except json.JSONDecodeError as e:
        raise SubsonicDecodeError(f"Malformed JSON response: {e}") from e

    if not isinstance(document, Mapping):
        raise SubsonicDecodeError("Response document is not a JSON object")
    return document


def _select_payload_node(root: Mapping[str, Any], wire_keys: Tuple[str, ...]) -> Mapping[str, Any]:
    for key in wire_keys:
        if key in root:
            return get_node(root, key)
    return {}


def decode_response(raw: RawResponse, payload_kind: PayloadKind) -> SubsonicEnvelope:
    """Decode a raw response into an envelope.

    Args:
        raw: Response body (bytes or str) or an already parsed document
        payload_kind: Payload shape expected for the endpoint that was called

    Returns:
        SubsonicEnvelope. For failed responses ``error`` is populated and
        ``payload`` is None. For successful responses ``payload`` holds the
        decoded native shape (None only for PayloadKind.NONE); a missing
        payload node decodes to the empty structure of that kind.

    Raises:
        SubsonicDecodeError: Malformed JSON, missing ``subsonic-response``
            root, or a status other than "ok"/"failed"

    Examples:
        >>> envelope = decode_response(
        ...     '{"subsonic-response": {"status": "ok", "version": "1.16.1"}}',
        ...     PayloadKind.NONE,
        ... )
        >>> envelope.status, envelope.version, envelope.payload
        ('ok', '1.16.1', None)
    """
    document = _load_document(raw)

    root = document.get(ROOT_KEY)
    if not isinstance(root, Mapping):
        raise SubsonicDecodeError(f"Response is missing the '{ROOT_KEY}' root element")

    status = get_str(root, "status")
    version = get_str(root, "version")
    server_type = get_optional_str(root, "type")
    server_version = get_optional_str(root, "serverVersion")
    open_subsonic = get_bool(root, "openSubsonic")

    if status == STATUS_FAILED:
        error_node = get_node(root, "error")
        error = SubsonicErrorInfo(
            code=get_int(error_node, "code"),
            message=get_str(error_node, "message"),
        )
        logger.debug(f"Server reported error {error.code}: {error.message}")
        return SubsonicEnvelope(
            status=status,
            version=version,
            error=error,
            type=server_type,
            serverVersion=server_version,
            openSubsonic=open_subsonic,
        )

    if status != STATUS_OK:
        raise SubsonicDecodeError(f"Unknown response status: {status!r}")

    registration = _DECODERS.get(payload_kind)
    if registration is None:
        raise SubsonicDecodeError(f"No decoder registered for {payload_kind}")

    node = _select_payload_node(root, registration.wire_keys)
    if registration.wire_keys and not node:
        logger.debug(f"Payload '{payload_kind.value}' absent, decoding empty structure")

    return SubsonicEnvelope(
        status=status,
        version=version,
        payload=registration.decode(node),
        type=server_type,
        serverVersion=server_version,
        openSubsonic=open_subsonic,
    )
