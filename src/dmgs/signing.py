"""Code signing identities and DMG signatures."""

from dmgs.errors import CommandFailed
from dmgs.utils.process import OutputCallback, ProcessRunner

AUTHORITY_MARKER = "Authority="
NO_IDENTITIES_MARKER = "0 valid identities found"


async def list_identities(runner: ProcessRunner) -> str:
    """Return ``security find-identity`` output for code signing identities."""
    try:
        return await runner.capture("security", ["find-identity", "-v", "-p", "codesigning"])
    except CommandFailed as e:
        raise CommandFailed(
            "security find-identity",
            "Failed to query available signing identities",
        ) from e


def has_identities(listing: str) -> bool:
    """Whether a ``find-identity`` listing contains any usable identity."""
    return bool(listing.strip()) and NO_IDENTITIES_MARKER not in listing


async def validate_identity(runner: ProcessRunner, identity: str) -> None:
    """Check that ``identity`` is present in the keychain.

    Raises:
        CommandFailed: If the identity is not listed
    """
    listing = await list_identities(runner)
    if identity not in listing:
        raise CommandFailed(
            "security find-identity",
            f"Signing identity '{identity}' not found in keychain. "
            f"Available identities:\n{listing}",
        )


def find_authority(codesign_info: str) -> str | None:
    """First signing authority in ``codesign -dvv`` output."""
    for line in codesign_info.splitlines():
        if line.startswith(AUTHORITY_MARKER):
            return line[len(AUTHORITY_MARKER):]
    return None


async def sign_dmg(
    runner: ProcessRunner,
    dmg_path: str,
    identity: str,
    on_output: OutputCallback | None = None,
) -> str:
    """Sign the DMG and confirm the signature names a signing authority.

    Returns:
        The first signing authority reported by codesign

    Raises:
        CommandFailed: If signing fails or no authority is reported
    """
    await runner.run("codesign", ["--force", "--sign", identity, dmg_path], on_output)

    # codesign -d writes its report to stderr, which the runner merges
    info = await runner.capture("codesign", ["-dvv", dmg_path])
    authority = find_authority(info)
    if authority is None:
        raise CommandFailed(
            f"codesign -dvv {dmg_path}",
            f"DMG signature has no signing authority:\n{info}",
        )
    return authority
