"""HTTP client for Subsonic-compatible servers."""

import asyncio
import logging
import time
from collections import deque
from enum import Enum
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union
from urllib.parse import urljoin

import httpx

from .auth import create_auth_params
from .decoder import PayloadKind, decode_response
from .dispatch import call_versioned
from .exceptions import SubsonicVersionError, raise_for_error
from .models import SubsonicConfig
from .responses import (
    Album,
    AlbumInfo,
    AlbumList,
    Artist,
    ArtistInfo,
    ArtistsIndex,
    Bookmark,
    Genre,
    Indexes,
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
)
from .selector import Operation
from .version import ApiVersion

logger = logging.getLogger(__name__)

MAX_LIST_SIZE = 500

STAR_PARAMS = {"song": "id", "album": "albumId", "artist": "artistId"}

MIN_RATING = 0
MAX_RATING = 5


class AlbumListType(str, Enum):
    """Orderings accepted by getAlbumList / getAlbumList2."""

    RANDOM = "random"
    NEWEST = "newest"
    HIGHEST = "highest"
    FREQUENT = "frequent"
    RECENT = "recent"
    ALPHABETICAL_BY_NAME = "alphabeticalByName"
    ALPHABETICAL_BY_ARTIST = "alphabeticalByArtist"
    STARRED = "starred"
    BY_YEAR = "byYear"
    BY_GENRE = "byGenre"


def _require_id(value: str, name: str) -> None:
    if not value:
        raise ValueError(f"{name} is required")


class SubsonicClient:
    """Synchronous HTTP client for the Subsonic REST API.

    Operations that exist in two endpoint generations (starred items, album
    lists, artist and album info) pick the endpoint from the server's
    advertised protocol version and always return the unified types. The
    server version is learned from every response; if it is still unknown
    when a version-dependent call is made, the client pings first.

    Attributes:
        config: SubsonicConfig with server connection details
        client: httpx.Client for HTTP requests
        server_version: Protocol version from the most recent response
        opensubsonic: True if the server advertises OpenSubsonic
        opensubsonic_version: Server software version (OpenSubsonic)
        server_type: Server software name (OpenSubsonic)

    Example:
        >>> config = SubsonicConfig(
        ...     url="https://music.example.com",
        ...     username="john",
        ...     password="secret"
        ... )
        >>> with SubsonicClient(config) as client:
        ...     starred = client.get_starred()
        ...     print(f"{len(starred.songs)} starred songs")
    """

    def __init__(self, config: SubsonicConfig, rate_limit: Optional[int] = None):
        """Initialize the client.

        Args:
            config: SubsonicConfig with server URL and credentials
            rate_limit: Optional maximum requests per second (default: None, no limit)
        """
        self.config = config
        self._base_url = config.url.rstrip("/")

        self.server_version: Optional[str] = None
        self.opensubsonic = False
        self.opensubsonic_version: Optional[str] = None
        self.server_type: Optional[str] = None

        self.rate_limit = rate_limit
        self._request_times: Optional[deque] = deque(maxlen=100) if rate_limit else None

        transport = httpx.HTTPTransport(
            limits=httpx.Limits(
                max_connections=100,
                max_keepalive_connections=20,
                keepalive_expiry=5.0,
            ),
            retries=3,
        )
        timeout = httpx.Timeout(connect=30.0, read=60.0, write=30.0, pool=5.0)

        try:
            self.client = httpx.Client(
                base_url=self._base_url,
                timeout=timeout,
                transport=transport,
                follow_redirects=True,
                http2=True,
            )
        except ImportError:
            # h2 not installed
            logger.debug("HTTP/2 not available, using HTTP/1.1")
            self.client = httpx.Client(
                base_url=self._base_url,
                timeout=timeout,
                transport=transport,
                follow_redirects=True,
            )

        logger.info(f"Initialized Subsonic client for {self._base_url}")
        if rate_limit:
            logger.info(f"Rate limiting enabled: {rate_limit} requests/second")

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    def _apply_rate_limit(self):
        """Sleep as needed to stay under ``rate_limit`` requests per second.

        Uses a sliding one-second window over recent request times.
        """
        if not self.rate_limit or self._request_times is None:
            return

        now = time.time()
        while self._request_times and now - self._request_times[0] > 1.0:
            self._request_times.popleft()

        if len(self._request_times) >= self.rate_limit:
            sleep_time = 1.0 - (now - self._request_times[0])
            if sleep_time > 0:
                logger.debug(f"Rate limit reached, sleeping for {sleep_time:.3f}s")
                time.sleep(sleep_time)
                now = time.time()
                while self._request_times and now - self._request_times[0] > 1.0:
                    self._request_times.popleft()

        self._request_times.append(time.time())

    def _build_url(self, endpoint: str) -> str:
        """Build the full URL for an endpoint, keeping any base path."""
        return urljoin(f"{self._base_url}/", f"rest/{endpoint}")

    def _request_version(self) -> str:
        """Protocol version to send as ``v``.

        The configured version, lowered to the server's version once that is
        known, so older servers do not answer with error 30.
        """
        configured = ApiVersion.parse(self.config.api_version)
        server = ApiVersion.parse(self.server_version)
        if server is not None and server < configured:
            return str(server)
        return self.config.api_version

    def _build_params(self, **kwargs) -> Dict[str, Union[str, List[str]]]:
        """Build query parameters with authentication and protocol version.

        None values are skipped; booleans are sent as "true"/"false"; lists
        and tuples become repeated parameters (songId=1&songId=2).
        """
        params = create_auth_params(self.config, api_version=self._request_version())

        for key, value in kwargs.items():
            if value is None:
                continue
            if isinstance(value, bool):
                params[key] = str(value).lower()
            elif isinstance(value, Enum):
                params[key] = str(value.value)
            elif isinstance(value, (list, tuple)):
                params[key] = [str(item) for item in value]
            else:
                params[key] = str(value)

        return params

    def _send(self, endpoint: str, params: Optional[Mapping[str, Any]] = None) -> bytes:
        """Perform one GET request and return the raw body.

        Raises:
            httpx.HTTPStatusError: For HTTP 4xx/5xx responses
            httpx.HTTPError: For network errors
        """
        url = self._build_url(endpoint)
        query = self._build_params(**dict(params or {}))

        logger.debug(f"GET {endpoint}")
        self._apply_rate_limit()
        response = self.client.get(url, params=query)
        response.raise_for_status()
        return response.content

    def _record_envelope(self, envelope: SubsonicEnvelope) -> None:
        """Remember server version and OpenSubsonic details from a response."""
        if envelope.version and envelope.version != self.server_version:
            logger.debug(f"Server protocol version: {envelope.version}")
            self.server_version = envelope.version

        self.opensubsonic = envelope.openSubsonic
        self.opensubsonic_version = envelope.serverVersion if envelope.openSubsonic else None
        self.server_type = envelope.type

    def _check(self, envelope: SubsonicEnvelope) -> SubsonicEnvelope:
        self._record_envelope(envelope)
        if envelope.error is not None:
            logger.error(f"Subsonic API error {envelope.error.code}: {envelope.error.message}")
            raise_for_error(envelope)
        return envelope

    def _call(self, endpoint: str, payload_kind: PayloadKind, **params) -> Any:
        """Call a single-generation endpoint and return its decoded payload."""
        raw = self._send(endpoint, params)
        return self._check(decode_response(raw, payload_kind)).payload

    # ------------------------------------------------------------------
    # System
    # ------------------------------------------------------------------

    def ping(self) -> bool:
        """Test connectivity and credentials, and learn the server version.

        The server version is recorded even when the ping itself fails.

        Returns:
            True if ping successful

        Raises:
            SubsonicAuthenticationError: If credentials are invalid
            SubsonicVersionError: If the protocol versions are incompatible
            httpx.HTTPError: For network/HTTP errors
        """
        logger.debug(f"Pinging Subsonic server at {self._base_url}")
        self._call("ping", PayloadKind.NONE)

        if self.opensubsonic:
            logger.info(
                f"OpenSubsonic server detected: {self.server_type or 'unknown'} "
                f"{self.opensubsonic_version or ''}".rstrip()
            )
        logger.info(f"Subsonic ping successful (protocol {self.server_version})")
        return True

    def _ensure_server_version(self) -> None:
        """Ping once when the server version is still unknown.

        A version error from the ping is tolerated when the failed response
        still told us the server version; later requests send a lower ``v``.
        """
        if self.server_version is not None:
            return
        try:
            self.ping()
        except SubsonicVersionError as e:
            if self.server_version is None:
                raise
            logger.warning(
                f"Ping rejected with version error ({e.message}); "
                f"continuing with server protocol {self.server_version}"
            )

    def get_scan_status(self) -> ScanStatus:
        return self._call("getScanStatus", PayloadKind.SCAN_STATUS)

    def start_scan(self) -> ScanStatus:
        """Ask the server to rescan the media library (protocol 1.15.0+)."""
        status = self._call("startScan", PayloadKind.SCAN_STATUS)
        logger.info(f"Library scan requested (scanning={status.scanning}, count={status.count})")
        return status

    def get_license(self) -> License:
        return self._call("getLicense", PayloadKind.LICENSE)

    # ------------------------------------------------------------------
    # Version-adaptive operations
    # ------------------------------------------------------------------

    def call_versioned(self, operation: Operation, **params) -> SubsonicEnvelope:
        """Run a dual-generation operation and return the unified envelope.

        Unlike the typed helpers this does not raise for failed responses;
        the envelope carries the server's error.

        Args:
            operation: Logical operation
            **params: Wire parameters (None values are ignored)

        Returns:
            SubsonicEnvelope with a unified payload
        """
        self._ensure_server_version()
        envelope = call_versioned(operation, params, self._send, self.server_version)
        self._record_envelope(envelope)
        return envelope

    def _call_versioned(self, operation: Operation, **params) -> Any:
        envelope = self.call_versioned(operation, **params)
        return self._check(envelope).payload

    def get_starred(self, music_folder_id: Optional[str] = None) -> Starred:
        """Get starred artists, albums and songs.

        Uses getStarred2 on servers from protocol 1.8.0, getStarred before.

        Args:
            music_folder_id: Restrict to one music folder (dropped on getStarred)

        Returns:
            Starred with artists, albums and songs in server order
        """
        starred = self._call_versioned(Operation.STARRED, musicFolderId=music_folder_id)
        logger.info(
            f"Retrieved starred items: {len(starred.artists)} artists, "
            f"{len(starred.albums)} albums, {len(starred.songs)} songs"
        )
        return starred

    def get_album_list(
        self,
        list_type: str = AlbumListType.NEWEST,
        size: int = 10,
        offset: int = 0,
        from_year: Optional[int] = None,
        to_year: Optional[int] = None,
        genre: Optional[str] = None,
        music_folder_id: Optional[str] = None,
    ) -> AlbumList:
        """Get a page of albums in the given order.

        Uses getAlbumList2 on servers from protocol 1.11.0, getAlbumList
        before. getAlbumList does not take year, genre or folder filters;
        those are dropped with a warning.

        Args:
            list_type: An AlbumListType value
            size: Number of albums (max 500)
            offset: Paging offset
            from_year: First year (required for byYear)
            to_year: Last year (required for byYear)
            genre: Genre name (required for byGenre)
            music_folder_id: Restrict to one music folder

        Returns:
            AlbumList

        Raises:
            ValueError: For an unknown list type or missing required filters
        """
        try:
            list_type = AlbumListType(list_type)
        except ValueError as e:
            raise ValueError(f"Unknown album list type: {list_type!r}") from e

        if list_type is AlbumListType.BY_YEAR and (from_year is None or to_year is None):
            raise ValueError("from_year and to_year are required for byYear album lists")
        if list_type is AlbumListType.BY_GENRE and not genre:
            raise ValueError("genre is required for byGenre album lists")

        return self._call_versioned(
            Operation.ALBUM_LIST,
            type=list_type.value,
            size=min(size, MAX_LIST_SIZE),
            offset=offset,
            fromYear=from_year,
            toYear=to_year,
            genre=genre,
            musicFolderId=music_folder_id,
        )

    def get_artist_info(
        self, artist_id: str, count: int = 20, include_not_present: bool = False
    ) -> ArtistInfo:
        """Get biography, images and similar artists.

        Uses getArtistInfo2 on servers from protocol 1.11.0, getArtistInfo before.
        """
        _require_id(artist_id, "artist_id")
        return self._call_versioned(
            Operation.ARTIST_INFO,
            id=artist_id,
            count=count,
            includeNotPresent=include_not_present,
        )

    def get_album_info(self, album_id: str) -> AlbumInfo:
        """Get album notes and images.

        Uses getAlbumInfo2 on servers from protocol 1.11.0, getAlbumInfo before.
        """
        _require_id(album_id, "album_id")
        return self._call_versioned(Operation.ALBUM_INFO, id=album_id)

    # ------------------------------------------------------------------
    # Browsing
    # ------------------------------------------------------------------

    def get_music_folders(self) -> Tuple[MusicFolder, ...]:
        return self._call("getMusicFolders", PayloadKind.MUSIC_FOLDERS)

    def get_indexes(
        self,
        music_folder_id: Optional[str] = None,
        if_modified_since: Optional[int] = None,
    ) -> Indexes:
        """Get the folder-based artist index.

        Args:
            music_folder_id: Restrict to one music folder
            if_modified_since: Unix time in milliseconds; servers return an
                empty index when nothing changed since then
        """
        return self._call(
            "getIndexes",
            PayloadKind.INDEXES,
            musicFolderId=music_folder_id,
            ifModifiedSince=if_modified_since,
        )

    def get_music_directory(self, directory_id: str) -> MusicDirectory:
        """Get a folder and its entries (subfolders and files)."""
        _require_id(directory_id, "directory_id")
        return self._call("getMusicDirectory", PayloadKind.MUSIC_DIRECTORY, id=directory_id)

    def get_genres(self) -> Tuple[Genre, ...]:
        genres = self._call("getGenres", PayloadKind.GENRES)
        logger.info(f"Retrieved {len(genres)} genres")
        return genres

    def get_artists(self, music_folder_id: Optional[str] = None) -> ArtistsIndex:
        """Get all artists grouped by index letter (ID3 tags)."""
        index = self._call("getArtists", PayloadKind.ARTISTS, musicFolderId=music_folder_id)
        logger.info(f"Retrieved {len(index.artists)} artists")
        return index

    def get_artist(self, artist_id: str) -> Artist:
        """Get an artist and its albums."""
        _require_id(artist_id, "artist_id")
        return self._call("getArtist", PayloadKind.ARTIST, id=artist_id)

    def get_album(self, album_id: str) -> Album:
        """Get an album and its songs."""
        _require_id(album_id, "album_id")
        return self._call("getAlbum", PayloadKind.ALBUM, id=album_id)

    def get_song(self, song_id: str) -> Song:
        _require_id(song_id, "song_id")
        return self._call("getSong", PayloadKind.SONG, id=song_id)

    def get_random_songs(
        self,
        size: int = 10,
        genre: Optional[str] = None,
        from_year: Optional[int] = None,
        to_year: Optional[int] = None,
        music_folder_id: Optional[str] = None,
    ) -> Tuple[Song, ...]:
        """Get random songs matching optional filters.

        Args:
            size: Number of songs to return (max 500)
            genre: Only songs in this genre
            from_year: Only songs from this year on
            to_year: Only songs up to this year
            music_folder_id: Restrict to one music folder
        """
        songs = self._call(
            "getRandomSongs",
            PayloadKind.RANDOM_SONGS,
            size=min(size, MAX_LIST_SIZE),
            genre=genre,
            fromYear=from_year,
            toYear=to_year,
            musicFolderId=music_folder_id,
        )
        logger.info(f"Retrieved {len(songs)} random songs")
        return songs

    def get_songs_by_genre(
        self,
        genre: str,
        count: int = 10,
        offset: int = 0,
        music_folder_id: Optional[str] = None,
    ) -> Tuple[Song, ...]:
        _require_id(genre, "genre")
        return self._call(
            "getSongsByGenre",
            PayloadKind.SONGS_BY_GENRE,
            genre=genre,
            count=min(count, MAX_LIST_SIZE),
            offset=offset,
            musicFolderId=music_folder_id,
        )

    def get_top_songs(self, artist: str, count: int = 50) -> Tuple[Song, ...]:
        """Get the top songs of an artist (by name, as reported by last.fm)."""
        _require_id(artist, "artist")
        return self._call("getTopSongs", PayloadKind.TOP_SONGS, artist=artist, count=count)

    def get_lyrics(self, artist: Optional[str] = None, title: Optional[str] = None) -> Lyrics:
        """Search lyrics by artist and/or title. No match gives empty Lyrics."""
        return self._call("getLyrics", PayloadKind.LYRICS, artist=artist, title=title)

    def search3(
        self,
        query: str,
        artist_count: int = 20,
        artist_offset: int = 0,
        album_count: int = 20,
        album_offset: int = 0,
        song_count: int = 20,
        song_offset: int = 0,
        music_folder_id: Optional[str] = None,
    ) -> SearchResult:
        """Search artists, albums and songs (ID3 tags).

        An empty query is passed through; many servers treat it as "match all".
        """
        logger.debug(
            f"Searching for '{query}' (artists={artist_count}, "
            f"albums={album_count}, songs={song_count})"
        )
        result = self._call(
            "search3",
            PayloadKind.SEARCH3,
            query=query,
            artistCount=artist_count,
            artistOffset=artist_offset,
            albumCount=album_count,
            albumOffset=album_offset,
            songCount=song_count,
            songOffset=song_offset,
            musicFolderId=music_folder_id,
        )
        logger.info(
            f"Search '{query}': {len(result.artists)} artists, "
            f"{len(result.albums)} albums, {len(result.songs)} songs"
        )
        return result

    # ------------------------------------------------------------------
    # Playlists
    # ------------------------------------------------------------------

    def get_playlists(self, username: Optional[str] = None) -> Tuple[Playlist, ...]:
        """Get playlists visible to the user (or to ``username``, admins only)."""
        return self._call("getPlaylists", PayloadKind.PLAYLISTS, username=username)

    def get_playlist(self, playlist_id: str) -> Playlist:
        """Get a playlist with its entries."""
        _require_id(playlist_id, "playlist_id")
        return self._call("getPlaylist", PayloadKind.PLAYLIST, id=playlist_id)

    def create_playlist(self, name: str, song_ids: Optional[Iterable[str]] = None) -> Playlist:
        """Create a playlist.

        Args:
            name: Playlist name
            song_ids: Songs to add, in order

        Returns:
            The new Playlist. Servers older than protocol 1.14.0 do not echo
            the playlist back; the result is then an empty Playlist.
        """
        _require_id(name, "name")
        playlist = self._call(
            "createPlaylist",
            PayloadKind.PLAYLIST,
            name=name,
            songId=list(song_ids or ()) or None,
        )
        logger.info(f"Created playlist '{name}'")
        return playlist

    def update_playlist(
        self,
        playlist_id: str,
        name: Optional[str] = None,
        comment: Optional[str] = None,
        public: Optional[bool] = None,
        song_ids_to_add: Optional[Iterable[str]] = None,
        song_indexes_to_remove: Optional[Iterable[int]] = None,
    ) -> bool:
        """Rename, describe or edit the entries of a playlist.

        Args:
            playlist_id: Playlist to change
            name: New name
            comment: New comment
            public: Share the playlist with other users
            song_ids_to_add: Songs appended to the end
            song_indexes_to_remove: Zero-based positions to remove
        """
        _require_id(playlist_id, "playlist_id")
        self._call(
            "updatePlaylist",
            PayloadKind.NONE,
            playlistId=playlist_id,
            name=name,
            comment=comment,
            public=public,
            songIdToAdd=list(song_ids_to_add or ()) or None,
            songIndexToRemove=list(song_indexes_to_remove or ()) or None,
        )
        logger.info(f"Updated playlist {playlist_id}")
        return True

    def delete_playlist(self, playlist_id: str) -> bool:
        _require_id(playlist_id, "playlist_id")
        self._call("deletePlaylist", PayloadKind.NONE, id=playlist_id)
        logger.info(f"Deleted playlist {playlist_id}")
        return True

    # ------------------------------------------------------------------
    # Annotation
    # ------------------------------------------------------------------

    def _star_params(self, item_id: str, item_type: str) -> Dict[str, str]:
        _require_id(item_id, "item_id")
        param_name = STAR_PARAMS.get(item_type)
        if param_name is None:
            raise ValueError(
                f"item_type must be one of {', '.join(STAR_PARAMS)}, got {item_type!r}"
            )
        return {param_name: item_id}

    def star(self, item_id: str, item_type: str = "song") -> bool:
        """Star an item.

        Args:
            item_id: ID of the item to star
            item_type: "song", "album" or "artist"

        Returns:
            True if successfully starred
        """
        self._call("star", PayloadKind.NONE, **self._star_params(item_id, item_type))
        logger.info(f"Starred {item_type} {item_id}")
        return True

    def unstar(self, item_id: str, item_type: str = "song") -> bool:
        """Remove the star from an item. See star()."""
        self._call("unstar", PayloadKind.NONE, **self._star_params(item_id, item_type))
        logger.info(f"Unstarred {item_type} {item_id}")
        return True

    def set_rating(self, item_id: str, rating: int) -> bool:
        """Rate a song, album or artist from 1 to 5; 0 removes the rating.

        Raises:
            ValueError: If rating is outside 0-5
        """
        _require_id(item_id, "item_id")
        if not MIN_RATING <= rating <= MAX_RATING:
            raise ValueError(f"rating must be between {MIN_RATING} and {MAX_RATING}, got {rating}")

        self._call("setRating", PayloadKind.NONE, id=item_id, rating=rating)
        logger.info(f"Rated {item_id}: {rating}")
        return True

    def scrobble(self, song_id: str, time_ms: Optional[int] = None, submission: bool = True) -> bool:
        """Register a play, or update "now playing" when ``submission`` is False.

        Args:
            song_id: ID of the song that was played
            time_ms: Unix time in milliseconds the playback started (default: now)
            submission: True for a scrobble, False for "now playing"
        """
        _require_id(song_id, "song_id")
        if time_ms is None:
            time_ms = int(time.time() * 1000)

        self._call("scrobble", PayloadKind.NONE, id=song_id, time=time_ms, submission=submission)
        action = "Scrobbled" if submission else "Updated now playing for"
        logger.info(f"{action} song {song_id}")
        return True

    # ------------------------------------------------------------------
    # Bookmarks and play queue
    # ------------------------------------------------------------------

    def get_bookmarks(self) -> Tuple[Bookmark, ...]:
        return self._call("getBookmarks", PayloadKind.BOOKMARKS)

    def create_bookmark(self, item_id: str, position_ms: int, comment: Optional[str] = None) -> bool:
        """Create or replace the bookmark for a media file.

        Args:
            item_id: Media file to bookmark
            position_ms: Playback position in milliseconds
            comment: Optional note
        """
        _require_id(item_id, "item_id")
        if position_ms < 0:
            raise ValueError(f"position_ms must not be negative, got {position_ms}")
        self._call(
            "createBookmark", PayloadKind.NONE, id=item_id, position=position_ms, comment=comment
        )
        return True

    def delete_bookmark(self, item_id: str) -> bool:
        _require_id(item_id, "item_id")
        self._call("deleteBookmark", PayloadKind.NONE, id=item_id)
        return True

    def get_play_queue(self) -> PlayQueue:
        """Get the queue saved by save_play_queue (empty when none was saved)."""
        return self._call("getPlayQueue", PayloadKind.PLAY_QUEUE)

    def save_play_queue(
        self,
        song_ids: Iterable[str],
        current: Optional[str] = None,
        position_ms: Optional[int] = None,
    ) -> bool:
        """Save the play queue so another client can resume it.

        Args:
            song_ids: Queue entries in order (at least one)
            current: ID of the song currently playing
            position_ms: Position within the current song in milliseconds
        """
        ids = list(song_ids)
        if not ids:
            raise ValueError("song_ids must contain at least one song")
        self._call(
            "savePlayQueue", PayloadKind.NONE, id=ids, current=current, position=position_ms
        )
        logger.info(f"Saved play queue with {len(ids)} songs")
        return True

    # ------------------------------------------------------------------
    # Async wrappers
    # ------------------------------------------------------------------

    async def get_starred_async(self, music_folder_id: Optional[str] = None) -> Starred:
        """Async wrapper for get_starred(); runs in a worker thread."""
        return await asyncio.to_thread(self.get_starred, music_folder_id=music_folder_id)

    async def get_album_list_async(self, list_type: str = AlbumListType.NEWEST, **kwargs) -> AlbumList:
        """Async wrapper for get_album_list()."""
        return await asyncio.to_thread(self.get_album_list, list_type, **kwargs)

    async def get_artist_info_async(self, artist_id: str, **kwargs) -> ArtistInfo:
        return await asyncio.to_thread(self.get_artist_info, artist_id, **kwargs)

    async def get_album_info_async(self, album_id: str) -> AlbumInfo:
        return await asyncio.to_thread(self.get_album_info, album_id)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def close(self):
        """Close the HTTP client and release pooled connections."""
        self.client.close()
        logger.info("Closed Subsonic client")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
