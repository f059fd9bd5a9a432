"""Legacy-to-unified schema adaptation.

Legacy endpoints (getStarred, getAlbumList, getArtistInfo, getAlbumInfo)
return directory-style entries and nullable text fields. The functions here
map those shapes onto the unified entities so callers always see the same
types whichever endpoint answered.

Mapping is pure and order-preserving: one unified record per legacy record,
same order, no network access and no new error kinds. Fields only the
modern generation carries get their zero value.
"""

from dataclasses import replace
from typing import Any, Callable, Optional

from .responses import (
    Album,
    AlbumInfo,
    AlbumList,
    Artist,
    ArtistInfo,
    Child,
    LegacyAlbumInfo,
    LegacyAlbumList,
    LegacyArtist,
    LegacyArtistInfo,
    LegacyStarred,
    Song,
    Starred,
    SubsonicEnvelope,
)

PayloadAdapter = Callable[[Optional[Any]], Any]


def _text(value: Optional[str]) -> str:
    return value if value is not None else ""


def artist_from_legacy(artist: LegacyArtist) -> Artist:
    """Map a legacy artist reference to a unified Artist.

    Legacy responses carry no per-artist starred timestamp, so ``starred``
    stays None.
    """
    return Artist(
        id=artist.id,
        name=artist.name,
        coverArt=artist.coverArt,
        albumCount=artist.albumCount,
        artistImageUrl=artist.artistImageUrl,
    )


def album_from_child(child: Child) -> Album:
    """Map a directory entry describing an album to a unified Album.

    Directory entries put the album name in ``title``; ``album`` is used
    when ``title`` is empty.

    Examples:
        >>> album_from_child(Child(id="al-1", title="Arrival", isDir=True)).name
        'Arrival'
        >>> album_from_child(Child(id="al-2", album="Voulez-Vous")).name
        'Voulez-Vous'
    """
    return Album(
        id=child.id,
        name=child.title or child.album or "",
        artist=_text(child.artist),
        artistId=_text(child.artistId),
        coverArt=child.coverArt,
        songCount=0,
        duration=child.duration,
        playCount=child.playCount,
        created=child.created,
        starred=child.starred,
        year=child.year,
        genre=child.genre,
    )


def song_from_child(child: Child) -> Song:
    """Map a file entry to a unified Song."""
    return Song(
        id=child.id,
        title=child.title,
        parent=child.parent,
        isDir=child.isDir,
        album=_text(child.album),
        artist=_text(child.artist),
        track=child.track,
        year=child.year,
        genre=child.genre,
        coverArt=child.coverArt,
        size=child.size,
        contentType=child.contentType,
        suffix=child.suffix,
        transcodedContentType=child.transcodedContentType,
        transcodedSuffix=child.transcodedSuffix,
        duration=child.duration,
        bitRate=child.bitRate,
        path=child.path,
        isVideo=child.isVideo,
        userRating=child.userRating,
        averageRating=child.averageRating,
        playCount=child.playCount,
        discNumber=child.discNumber,
        created=child.created,
        starred=child.starred,
        albumId=child.albumId,
        artistId=child.artistId,
    )


def adapt_starred(legacy: Optional[LegacyStarred]) -> Starred:
    """getStarred payload -> unified Starred."""
    if legacy is None:
        return Starred()
    return Starred(
        artists=tuple(artist_from_legacy(artist) for artist in legacy.artists),
        albums=tuple(album_from_child(album) for album in legacy.albums),
        songs=tuple(song_from_child(song) for song in legacy.songs),
    )


def adapt_album_list(legacy: Optional[LegacyAlbumList]) -> AlbumList:
    """getAlbumList payload -> unified AlbumList."""
    if legacy is None:
        return AlbumList()
    return AlbumList(albums=tuple(album_from_child(album) for album in legacy.albums))


def adapt_artist_info(legacy: Optional[LegacyArtistInfo]) -> ArtistInfo:
    """getArtistInfo payload -> unified ArtistInfo."""
    if legacy is None:
        return ArtistInfo()
    return ArtistInfo(
        biography=_text(legacy.biography),
        musicBrainzId=_text(legacy.musicBrainzId),
        lastFmUrl=_text(legacy.lastFmUrl),
        smallImageUrl=_text(legacy.smallImageUrl),
        mediumImageUrl=_text(legacy.mediumImageUrl),
        largeImageUrl=_text(legacy.largeImageUrl),
        similarArtists=tuple(artist_from_legacy(artist) for artist in legacy.similarArtists),
    )


def adapt_album_info(legacy: Optional[LegacyAlbumInfo]) -> AlbumInfo:
    """getAlbumInfo payload -> unified AlbumInfo."""
    if legacy is None:
        return AlbumInfo()
    return AlbumInfo(
        notes=_text(legacy.notes),
        musicBrainzId=_text(legacy.musicBrainzId),
        lastFmUrl=_text(legacy.lastFmUrl),
        smallImageUrl=_text(legacy.smallImageUrl),
        mediumImageUrl=_text(legacy.mediumImageUrl),
        largeImageUrl=_text(legacy.largeImageUrl),
    )


def adapt_envelope(envelope: SubsonicEnvelope, adapt_payload: PayloadAdapter) -> SubsonicEnvelope:
    """Convert a legacy envelope into its unified form.

    Status, version, error and the OpenSubsonic fields are copied unchanged.
    The result always carries a unified payload, empty when the legacy call
    returned none (including failed calls).

    Args:
        envelope: Envelope decoded from a legacy endpoint
        adapt_payload: One of the ``adapt_*`` payload functions

    Returns:
        New SubsonicEnvelope carrying the unified payload
    """
    return replace(envelope, payload=adapt_payload(envelope.payload))
