"""Integration tests for SubsonicClient.

These tests use pytest-mock to mock httpx.Client responses and validate the
client end to end: parameters on the wire, endpoint generation selection,
decoding and the typed results. No real server requests are made.
"""

import logging
from typing import Any, Dict

import httpx
import pytest
from pytest_mock import MockerFixture

from subsonic_compat.client import AlbumListType, SubsonicClient
from subsonic_compat.exceptions import (
    ServerVersionTooOldError,
    SubsonicAuthenticationError,
    SubsonicNotFoundError,
)
from subsonic_compat.models import SubsonicConfig
from subsonic_compat.responses import (
    AlbumInfo,
    AlbumList,
    ArtistInfo,
    ArtistsIndex,
    Indexes,
    License,
    MusicDirectory,
    PlayQueue,
    Playlist,
    ScanStatus,
    SearchResult,
    Starred,
)
from subsonic_compat.selector import Operation


@pytest.fixture
def client(mocker: MockerFixture, subsonic_config: SubsonicConfig) -> SubsonicClient:
    """SubsonicClient whose httpx.Client is a mock (no HTTP/2 or network)."""
    mock_client = mocker.MagicMock(spec=httpx.Client)
    mocker.patch("httpx.Client", return_value=mock_client)
    return SubsonicClient(subsonic_config)


def mock_response(status_code: int, json_data: Dict[str, Any], endpoint: str = "ping") -> httpx.Response:
    """Create an httpx.Response carrying a JSON body."""
    return httpx.Response(
        status_code=status_code,
        json=json_data,
        request=httpx.Request("GET", f"https://music.example.com/rest/{endpoint}"),
    )


def requested(client: SubsonicClient, index: int = -1):
    """Return (endpoint, params) of a recorded GET call."""
    call = client.client.get.call_args_list[index]
    return call.args[0].rsplit("/", 1)[-1], call.kwargs["params"]


class TestPing:
    def test_ping_success(self, client, fixtures, mocker):
        """Ping sends token auth parameters and records the server version."""
        client.client.get = mocker.MagicMock(return_value=mock_response(200, fixtures["ping_success"]))

        assert client.ping() is True

        endpoint, params = requested(client)
        assert endpoint == "ping"
        assert {"u", "t", "s"} <= set(params)
        assert "p" not in params
        assert params["c"] == "subsonic-compat-test"
        assert params["v"] == "1.16.1"
        assert params["f"] == "json"
        assert client.server_version == "1.16.1"

    def test_ping_auth_failure(self, client, fixtures, mocker):
        client.client.get = mocker.MagicMock(return_value=mock_response(200, fixtures["ping_auth_failure"]))

        with pytest.raises(SubsonicAuthenticationError) as exc_info:
            client.ping()

        assert exc_info.value.code == 40
        assert "Wrong username or password" in exc_info.value.message

    def test_ping_failure_still_records_version(self, client, fixtures, mocker):
        client.client.get = mocker.MagicMock(return_value=mock_response(200, fixtures["ping_server_too_old"]))

        with pytest.raises(ServerVersionTooOldError):
            client.ping()

        assert client.server_version == "1.7.0"

    def test_ping_opensubsonic_detection(self, client, fixtures, mocker):
        client.client.get = mocker.MagicMock(return_value=mock_response(200, fixtures["ping_opensubsonic"]))

        client.ping()

        assert client.opensubsonic is True
        assert client.opensubsonic_version == "0.53.3 (13af8ed4)"
        assert client.server_type == "navidrome"

    def test_http_error_propagates(self, client, mocker):
        client.client.get = mocker.MagicMock(return_value=mock_response(500, {"error": "boom"}))

        with pytest.raises(httpx.HTTPStatusError):
            client.ping()


class TestRequestVersion:
    def test_version_capped_at_server_version(self, client, fixtures, mocker):
        """Once an older server is known, requests announce its version."""
        client.server_version = "1.7.0"
        client.client.get = mocker.MagicMock(return_value=mock_response(200, fixtures["ping_legacy_server"]))

        client.ping()

        assert requested(client)[1]["v"] == "1.7.0"

    def test_newer_server_uses_configured_version(self, client, fixtures, mocker):
        client.server_version = "1.99.0"
        client.client.get = mocker.MagicMock(return_value=mock_response(200, fixtures["ping_success"]))

        client.ping()

        assert requested(client)[1]["v"] == "1.16.1"


class TestStarred:
    def test_legacy_server(self, client, fixtures, mocker):
        """Unknown version: ping first, then getStarred adapted to Starred."""
        client.client.get = mocker.MagicMock(
            side_effect=[
                mock_response(200, fixtures["ping_legacy_server"]),
                mock_response(200, fixtures["getStarred_legacy"], "getStarred"),
            ]
        )

        starred = client.get_starred()

        assert [requested(client, i)[0] for i in range(2)] == ["ping", "getStarred"]
        assert requested(client)[1]["v"] == "1.7.0"
        assert isinstance(starred, Starred)
        assert starred.artists[0].id == "ar-1"
        assert starred.artists[0].name == "ABBA"
        assert starred.artists[0].starred is None
        assert starred.albums[0].name == "Arrival"
        assert starred.songs[0].title == "Dancing Queen"

    def test_modern_server(self, client, fixtures, mocker):
        client.server_version = "1.16.1"
        client.client.get = mocker.MagicMock(
            return_value=mock_response(200, fixtures["getStarred2_success"], "getStarred2")
        )

        starred = client.get_starred(music_folder_id="1")

        client.client.get.assert_called_once()
        endpoint, params = requested(client)
        assert endpoint == "getStarred2"
        assert params["musicFolderId"] == "1"
        assert starred.artists[0].albumCount == 8

    def test_version_error_on_ping_falls_back(self, client, fixtures, mocker, caplog):
        """A ping rejected with error 30 still reveals the version to use."""
        client.client.get = mocker.MagicMock(
            side_effect=[
                mock_response(200, fixtures["ping_server_too_old"]),
                mock_response(200, fixtures["getStarred_legacy"], "getStarred"),
            ]
        )

        with caplog.at_level(logging.WARNING):
            starred = client.get_starred()

        assert requested(client)[0] == "getStarred"
        assert requested(client)[1]["v"] == "1.7.0"
        assert starred.artists[0].name == "ABBA"
        assert "continuing with server protocol 1.7.0" in caplog.text

    def test_failed_response_raises(self, client, fixtures, mocker):
        client.server_version = "1.16.1"
        client.client.get = mocker.MagicMock(
            return_value=mock_response(200, fixtures["getAlbum_not_found"], "getStarred2")
        )

        with pytest.raises(SubsonicNotFoundError) as exc_info:
            client.get_starred()

        assert exc_info.value.code == 70

    def test_call_versioned_returns_failed_envelope(self, client, fixtures, mocker):
        client.server_version = "1.16.1"
        client.client.get = mocker.MagicMock(
            return_value=mock_response(200, fixtures["getAlbum_not_found"], "getStarred2")
        )

        envelope = client.call_versioned(Operation.STARRED)

        assert envelope.status == "failed"
        assert envelope.error.code == 70
        assert envelope.payload is None


class TestAlbumList:
    def test_modern(self, client, fixtures, mocker):
        client.server_version = "1.16.1"
        client.client.get = mocker.MagicMock(
            return_value=mock_response(200, fixtures["getAlbumList2_success"], "getAlbumList2")
        )

        albums = client.get_album_list(AlbumListType.BY_GENRE, genre="Pop", size=2)

        endpoint, params = requested(client)
        assert endpoint == "getAlbumList2"
        assert params["type"] == "byGenre"
        assert params["genre"] == "Pop"
        assert params["size"] == "2"
        assert [a.name for a in albums.albums] == ["Voulez-Vous", "Arrival"]

    def test_legacy_drops_filters(self, client, fixtures, mocker, caplog):
        client.server_version = "1.10.2"
        client.client.get = mocker.MagicMock(
            return_value=mock_response(200, fixtures["getAlbumList_legacy"], "getAlbumList")
        )

        with caplog.at_level(logging.WARNING):
            albums = client.get_album_list("byYear", from_year=1970, to_year=1979)

        endpoint, params = requested(client)
        assert endpoint == "getAlbumList"
        assert params["type"] == "byYear"
        assert "fromYear" not in params
        assert "toYear" not in params
        assert "'fromYear'" in caplog.text
        assert isinstance(albums, AlbumList)
        assert albums.albums[0].name == "Voulez-Vous"

    def test_size_capped(self, client, fixtures, mocker):
        client.server_version = "1.16.1"
        client.client.get = mocker.MagicMock(
            return_value=mock_response(200, fixtures["getAlbumList2_success"], "getAlbumList2")
        )

        client.get_album_list("random", size=5000)

        assert requested(client)[1]["size"] == "500"

    @pytest.mark.parametrize(
        "kwargs,message",
        [
            ({"list_type": "bogus"}, "Unknown album list type"),
            ({"list_type": "byYear", "from_year": 1970}, "from_year and to_year"),
            ({"list_type": "byGenre"}, "genre is required"),
        ],
    )
    def test_invalid_arguments(self, client, mocker, kwargs, message):
        client.client.get = mocker.MagicMock()

        with pytest.raises(ValueError, match=message):
            client.get_album_list(**kwargs)

        client.client.get.assert_not_called()


class TestInfo:
    def test_artist_info_legacy(self, client, fixtures, mocker):
        client.server_version = "1.10.2"
        client.client.get = mocker.MagicMock(
            return_value=mock_response(200, fixtures["getArtistInfo_legacy"], "getArtistInfo")
        )

        info = client.get_artist_info("ar-1", count=5)

        endpoint, params = requested(client)
        assert endpoint == "getArtistInfo"
        assert params["id"] == "ar-1"
        assert params["count"] == "5"
        assert params["includeNotPresent"] == "false"
        assert isinstance(info, ArtistInfo)
        assert info.lastFmUrl == ""
        assert [a.name for a in info.similarArtists] == ["Boney M.", "Bee Gees"]
        assert info.similarArtists[0].albumCount == 0

    def test_album_info_modern(self, client, fixtures, mocker):
        client.server_version = "1.16.1"
        client.client.get = mocker.MagicMock(
            return_value=mock_response(200, fixtures["getAlbumInfo2_success"], "getAlbumInfo2")
        )

        info = client.get_album_info("al-1")

        assert requested(client)[0] == "getAlbumInfo2"
        assert isinstance(info, AlbumInfo)
        assert info.notes == "Fourth studio album."

    def test_empty_ids_rejected(self, client):
        with pytest.raises(ValueError):
            client.get_artist_info("")
        with pytest.raises(ValueError):
            client.get_album_info("")


class TestBrowsing:
    def test_get_album(self, client, fixtures, mocker):
        client.client.get = mocker.MagicMock(
            return_value=mock_response(200, fixtures["getAlbum_success"], "getAlbum")
        )

        album = client.get_album("200")

        endpoint, params = requested(client)
        assert endpoint == "getAlbum"
        assert params["id"] == "200"
        assert album.artist == "Queen"
        assert len(album.songs) == 2

    def test_get_album_not_found(self, client, fixtures, mocker):
        client.client.get = mocker.MagicMock(
            return_value=mock_response(200, fixtures["getAlbum_not_found"], "getAlbum")
        )

        with pytest.raises(SubsonicNotFoundError):
            client.get_album("missing")

    def test_get_artists(self, client, fixtures, mocker):
        client.client.get = mocker.MagicMock(
            return_value=mock_response(200, fixtures["getArtists_success"], "getArtists")
        )

        index = client.get_artists()

        assert "musicFolderId" not in requested(client)[1]
        assert isinstance(index, ArtistsIndex)
        assert len(index.artists) == 3

    def test_get_genres(self, client, fixtures, mocker):
        client.client.get = mocker.MagicMock(
            return_value=mock_response(200, fixtures["getGenres_success"], "getGenres")
        )

        genres = client.get_genres()

        assert [g.value for g in genres] == ["Rock", "Pop"]

    def test_get_music_folders(self, client, fixtures, mocker):
        client.client.get = mocker.MagicMock(
            return_value=mock_response(200, fixtures["getMusicFolders_success"], "getMusicFolders")
        )

        assert [f.name for f in client.get_music_folders()] == ["Music", "Audiobooks"]

    def test_get_random_songs(self, client, fixtures, mocker):
        client.client.get = mocker.MagicMock(
            return_value=mock_response(200, fixtures["getRandomSongs_success"], "getRandomSongs")
        )

        songs = client.get_random_songs(size=2, genre="Rock")

        endpoint, params = requested(client)
        assert endpoint == "getRandomSongs"
        assert params["genre"] == "Rock"
        assert "fromYear" not in params
        assert len(songs) == 2

    def test_get_songs_by_genre_empty(self, client, fixtures, mocker):
        client.client.get = mocker.MagicMock(
            return_value=mock_response(200, fixtures["empty_ok"], "getSongsByGenre")
        )

        assert client.get_songs_by_genre("Jazz") == ()

    def test_get_top_songs(self, client, fixtures, mocker):
        client.client.get = mocker.MagicMock(
            return_value=mock_response(200, fixtures["empty_ok"], "getTopSongs")
        )

        assert client.get_top_songs("Queen", count=3) == ()
        assert requested(client)[1]["artist"] == "Queen"

    def test_search3(self, client, fixtures, mocker):
        client.client.get = mocker.MagicMock(
            return_value=mock_response(200, fixtures["search3_success"], "search3")
        )

        result = client.search3("queen", song_count=10)

        params = requested(client)[1]
        assert params["query"] == "queen"
        assert params["songCount"] == "10"
        assert isinstance(result, SearchResult)
        assert result.songs[0].title == "Bohemian Rhapsody"

    def test_get_song_requires_id(self, client):
        with pytest.raises(ValueError):
            client.get_song("")


class TestPlaylistsAndStatus:
    def test_get_playlists(self, client, fixtures, mocker):
        client.client.get = mocker.MagicMock(
            return_value=mock_response(200, fixtures["getPlaylists_success"], "getPlaylists")
        )

        playlists = client.get_playlists()

        assert playlists[0].name == "Road Trip"
        assert playlists[0].public is True

    def test_get_playlist(self, client, fixtures, mocker):
        client.client.get = mocker.MagicMock(
            return_value=mock_response(200, fixtures["getPlaylist_success"], "getPlaylist")
        )

        playlist = client.get_playlist("pl-1")

        assert isinstance(playlist, Playlist)
        assert len(playlist.entries) == 2

    def test_get_scan_status(self, client, fixtures, mocker):
        client.client.get = mocker.MagicMock(
            return_value=mock_response(200, fixtures["getScanStatus_success"], "getScanStatus")
        )

        assert client.get_scan_status() == ScanStatus(scanning=False, count=25430)


class TestAnnotation:
    @pytest.mark.parametrize(
        "item_type,param", [("song", "id"), ("album", "albumId"), ("artist", "artistId")]
    )
    def test_star(self, client, fixtures, mocker, item_type, param):
        client.client.get = mocker.MagicMock(return_value=mock_response(200, fixtures["empty_ok"], "star"))

        assert client.star("x-1", item_type) is True

        endpoint, params = requested(client)
        assert endpoint == "star"
        assert params[param] == "x-1"

    def test_unstar(self, client, fixtures, mocker):
        client.client.get = mocker.MagicMock(return_value=mock_response(200, fixtures["empty_ok"], "unstar"))

        assert client.unstar("al-1", "album") is True
        assert requested(client)[0] == "unstar"

    def test_star_invalid_type(self, client):
        with pytest.raises(ValueError, match="item_type"):
            client.star("x-1", "playlist")

    def test_scrobble(self, client, fixtures, mocker):
        client.client.get = mocker.MagicMock(return_value=mock_response(200, fixtures["empty_ok"], "scrobble"))

        assert client.scrobble("so-1", time_ms=1705314600000, submission=False) is True

        params = requested(client)[1]
        assert params["id"] == "so-1"
        assert params["time"] == "1705314600000"
        assert params["submission"] == "false"

    def test_scrobble_defaults_to_now(self, client, fixtures, mocker):
        mocker.patch("subsonic_compat.client.time.time", return_value=1705314600.0)
        client.client.get = mocker.MagicMock(return_value=mock_response(200, fixtures["empty_ok"], "scrobble"))

        client.scrobble("so-1")

        params = requested(client)[1]
        assert params["time"] == "1705314600000"
        assert params["submission"] == "true"


class TestFolderBrowsing:
    def test_get_indexes(self, client, fixtures, mocker):
        client.client.get = mocker.MagicMock(
            return_value=mock_response(200, fixtures["getIndexes_success"], "getIndexes")
        )

        indexes = client.get_indexes(music_folder_id="1", if_modified_since=1705314600000)

        endpoint, params = requested(client)
        assert endpoint == "getIndexes"
        assert params["musicFolderId"] == "1"
        assert params["ifModifiedSince"] == "1705314600000"
        assert isinstance(indexes, Indexes)
        assert len(indexes.artists) == 3

    def test_get_music_directory(self, client, fixtures, mocker):
        client.client.get = mocker.MagicMock(
            return_value=mock_response(200, fixtures["getMusicDirectory_success"], "getMusicDirectory")
        )

        directory = client.get_music_directory("10")

        assert requested(client)[1]["id"] == "10"
        assert isinstance(directory, MusicDirectory)
        assert len(directory.children) == 3

    def test_get_music_directory_requires_id(self, client):
        with pytest.raises(ValueError, match="directory_id"):
            client.get_music_directory("")

    def test_get_lyrics(self, client, fixtures, mocker):
        client.client.get = mocker.MagicMock(
            return_value=mock_response(200, fixtures["getLyrics_success"], "getLyrics")
        )

        lyrics = client.get_lyrics(artist="ABBA", title="Dancing Queen")

        params = requested(client)[1]
        assert (params["artist"], params["title"]) == ("ABBA", "Dancing Queen")
        assert lyrics.value.startswith("You can dance")


class TestSystemOperations:
    def test_start_scan(self, client, fixtures, mocker):
        client.client.get = mocker.MagicMock(
            return_value=mock_response(200, fixtures["getScanStatus_success"], "startScan")
        )

        status = client.start_scan()

        assert requested(client)[0] == "startScan"
        assert status.count == 25430

    def test_get_license(self, client, fixtures, mocker):
        client.client.get = mocker.MagicMock(
            return_value=mock_response(200, fixtures["getLicense_success"], "getLicense")
        )

        license_info = client.get_license()

        assert isinstance(license_info, License)
        assert license_info.valid is True


class TestPlaylistManagement:
    def test_create_playlist_sends_repeated_song_ids(self, client, fixtures, mocker):
        client.client.get = mocker.MagicMock(
            return_value=mock_response(200, fixtures["createPlaylist_success"], "createPlaylist")
        )

        playlist = client.create_playlist("Road trip", song_ids=["so-1", "so-2"])

        endpoint, params = requested(client)
        assert endpoint == "createPlaylist"
        assert params["name"] == "Road trip"
        assert params["songId"] == ["so-1", "so-2"]
        assert playlist.id == "pl-9"
        assert [entry.id for entry in playlist.entries] == ["so-1", "so-2"]

    def test_create_playlist_on_old_server_returns_empty_playlist(self, client, fixtures, mocker):
        client.client.get = mocker.MagicMock(
            return_value=mock_response(200, fixtures["empty_ok"], "createPlaylist")
        )

        playlist = client.create_playlist("Empty")

        assert "songId" not in requested(client)[1]
        assert playlist == Playlist(id="")

    def test_create_playlist_requires_name(self, client):
        with pytest.raises(ValueError, match="name"):
            client.create_playlist("")

    def test_update_playlist(self, client, fixtures, mocker):
        client.client.get = mocker.MagicMock(
            return_value=mock_response(200, fixtures["empty_ok"], "updatePlaylist")
        )

        assert client.update_playlist(
            "pl-1",
            name="Renamed",
            public=True,
            song_ids_to_add=("so-3",),
            song_indexes_to_remove=[0, 2],
        ) is True

        endpoint, params = requested(client)
        assert endpoint == "updatePlaylist"
        assert params["playlistId"] == "pl-1"
        assert params["name"] == "Renamed"
        assert params["public"] == "true"
        assert params["songIdToAdd"] == ["so-3"]
        assert params["songIndexToRemove"] == ["0", "2"]
        assert "comment" not in params

    def test_delete_playlist(self, client, fixtures, mocker):
        client.client.get = mocker.MagicMock(
            return_value=mock_response(200, fixtures["empty_ok"], "deletePlaylist")
        )

        assert client.delete_playlist("pl-1") is True
        assert requested(client)[1]["id"] == "pl-1"

    def test_delete_missing_playlist_raises(self, client, fixtures, mocker):
        client.client.get = mocker.MagicMock(
            return_value=mock_response(200, fixtures["getAlbum_not_found"], "deletePlaylist")
        )

        with pytest.raises(SubsonicNotFoundError):
            client.delete_playlist("pl-404")


class TestRating:
    @pytest.mark.parametrize("rating", [0, 3, 5])
    def test_set_rating(self, client, fixtures, mocker, rating):
        client.client.get = mocker.MagicMock(
            return_value=mock_response(200, fixtures["empty_ok"], "setRating")
        )

        assert client.set_rating("so-1", rating) is True

        endpoint, params = requested(client)
        assert endpoint == "setRating"
        assert params["rating"] == str(rating)

    @pytest.mark.parametrize("rating", [-1, 6])
    def test_set_rating_out_of_range(self, client, rating):
        with pytest.raises(ValueError, match="between 0 and 5"):
            client.set_rating("so-1", rating)
        client.client.get.assert_not_called()


class TestBookmarksAndPlayQueue:
    def test_get_bookmarks(self, client, fixtures, mocker):
        client.client.get = mocker.MagicMock(
            return_value=mock_response(200, fixtures["getBookmarks_success"], "getBookmarks")
        )

        bookmarks = client.get_bookmarks()

        assert bookmarks[0].entry.title == "Chapter 3"

    def test_create_and_delete_bookmark(self, client, fixtures, mocker):
        client.client.get = mocker.MagicMock(
            return_value=mock_response(200, fixtures["empty_ok"], "createBookmark")
        )

        assert client.create_bookmark("so-9", 95000, comment="Chapter 3") is True
        assert client.delete_bookmark("so-9") is True

        create_endpoint, create_params = requested(client, 0)
        assert create_endpoint == "createBookmark"
        assert create_params["position"] == "95000"
        assert create_params["comment"] == "Chapter 3"
        assert requested(client, 1)[0] == "deleteBookmark"

    def test_negative_bookmark_position(self, client):
        with pytest.raises(ValueError, match="position_ms"):
            client.create_bookmark("so-9", -1)

    def test_get_play_queue(self, client, fixtures, mocker):
        client.client.get = mocker.MagicMock(
            return_value=mock_response(200, fixtures["getPlayQueue_success"], "getPlayQueue")
        )

        queue = client.get_play_queue()

        assert isinstance(queue, PlayQueue)
        assert queue.current == "so-2"

    def test_save_play_queue(self, client, fixtures, mocker):
        client.client.get = mocker.MagicMock(
            return_value=mock_response(200, fixtures["empty_ok"], "savePlayQueue")
        )

        assert client.save_play_queue(["so-1", "so-2"], current="so-2", position_ms=42000) is True

        params = requested(client)[1]
        assert params["id"] == ["so-1", "so-2"]
        assert params["current"] == "so-2"
        assert params["position"] == "42000"

    def test_save_empty_play_queue_rejected(self, client):
        with pytest.raises(ValueError, match="at least one"):
            client.save_play_queue([])


class TestAuthentication:
    def test_api_key(self, mocker, fixtures):
        mocker.patch("httpx.Client", return_value=mocker.MagicMock(spec=httpx.Client))
        client = SubsonicClient(
            SubsonicConfig(url="https://music.example.com", username="testuser", api_key="key-123")
        )
        client.client.get = mocker.MagicMock(return_value=mock_response(200, fixtures["ping_success"]))

        client.ping()

        params = requested(client)[1]
        assert params["u"] == "testuser"
        assert params["k"] == "key-123"
        assert "t" not in params and "p" not in params

    def test_legacy_password(self, mocker, fixtures):
        mocker.patch("httpx.Client", return_value=mocker.MagicMock(spec=httpx.Client))
        client = SubsonicClient(
            SubsonicConfig(
                url="https://music.example.com",
                username="testuser",
                password="sesame",
                auth_method="legacy",
            )
        )
        client.client.get = mocker.MagicMock(return_value=mock_response(200, fixtures["ping_success"]))

        client.ping()

        params = requested(client)[1]
        assert params["p"] == "enc:736573616d65"
        assert "t" not in params


class TestClientLifecycle:
    def test_build_url_keeps_base_path(self, mocker):
        mocker.patch("httpx.Client", return_value=mocker.MagicMock(spec=httpx.Client))
        client = SubsonicClient(
            SubsonicConfig(url="https://example.com/music/", username="u", password="p")
        )

        assert client._build_url("ping") == "https://example.com/music/rest/ping"

    def test_context_manager_closes(self, client):
        with client as entered:
            assert entered is client

        client.client.close.assert_called_once()

    def test_http2_fallback(self, mocker, subsonic_config):
        """Without h2 installed the client falls back to HTTP/1.1."""
        fallback = mocker.MagicMock(spec=httpx.Client)
        factory = mocker.patch("httpx.Client", side_effect=[ImportError("h2"), fallback])

        client = SubsonicClient(subsonic_config)

        assert client.client is fallback
        assert factory.call_args_list[0].kwargs["http2"] is True
        assert "http2" not in factory.call_args_list[1].kwargs

    def test_rate_limit_sleeps_when_window_full(self, mocker, subsonic_config):
        mocker.patch("httpx.Client", return_value=mocker.MagicMock(spec=httpx.Client))
        sleep = mocker.patch("subsonic_compat.client.time.sleep")
        mocker.patch("subsonic_compat.client.time.time", return_value=100.0)
        client = SubsonicClient(subsonic_config, rate_limit=2)

        client._apply_rate_limit()
        client._apply_rate_limit()
        sleep.assert_not_called()

        client._apply_rate_limit()
        sleep.assert_called_once_with(1.0)


class TestAsyncWrappers:
    @pytest.mark.asyncio
    async def test_get_starred_async(self, client, fixtures, mocker):
        client.server_version = "1.16.1"
        client.client.get = mocker.MagicMock(
            return_value=mock_response(200, fixtures["getStarred2_success"], "getStarred2")
        )

        starred = await client.get_starred_async()

        assert starred.songs[0].title == "Dancing Queen"

    @pytest.mark.asyncio
    async def test_get_album_list_async(self, client, fixtures, mocker):
        client.server_version = "1.10.2"
        client.client.get = mocker.MagicMock(
            return_value=mock_response(200, fixtures["getAlbumList_legacy"], "getAlbumList")
        )

        albums = await client.get_album_list_async("newest", size=2)

        assert len(albums.albums) == 2

    @pytest.mark.asyncio
    async def test_info_async(self, client, fixtures, mocker):
        client.server_version = "1.16.1"
        client.client.get = mocker.MagicMock(
            side_effect=[
                mock_response(200, fixtures["getArtistInfo2_success"], "getArtistInfo2"),
                mock_response(200, fixtures["getAlbumInfo2_success"], "getAlbumInfo2"),
            ]
        )

        artist_info = await client.get_artist_info_async("ar-1")
        album_info = await client.get_album_info_async("al-1")

        assert artist_info.lastFmUrl == "https://www.last.fm/music/ABBA"
        assert album_info.notes == "Fourth studio album."
