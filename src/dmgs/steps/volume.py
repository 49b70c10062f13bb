"""Working image lifecycle: create, mount, fill and detach."""

import posixpath

from dmgs.context import BuildContext, PipelineState
from dmgs.errors import VolumeNotMounted
from dmgs.steps.base import BuildStep, emit
from dmgs.utils.polling import wait_until
from dmgs.utils.process import OutputCallback

FILESYSTEM = "APFS"
APPLICATIONS_DIR = "/Applications"
BACKGROUND_DIR = ".background"


class CreateImageStep(BuildStep):
    """Create the read-write working image."""

    reaches = PipelineState.TEMP_CREATED

    def __init__(self) -> None:
        super().__init__("Creating temporary disk image...")

    async def execute(self, ctx: BuildContext, on_output: OutputCallback | None) -> None:
        config = ctx.config
        await ctx.runner.run(
            "hdiutil",
            [
                "create",
                "-size",
                config.volume_size,
                "-fs",
                FILESYSTEM,
                "-volname",
                config.app_name,
                config.temp_dmg_path,
            ],
            on_output,
        )

        async def remove_temp_image() -> None:
            ctx.fs.remove(config.temp_dmg_path)

        ctx.register("temp-image", f"Remove {config.temp_dmg_path}", remove_temp_image)


class MountStep(BuildStep):
    """Attach the working image and wait for its volume to appear."""

    reaches = PipelineState.MOUNTED

    def __init__(self) -> None:
        super().__init__("Mounting disk image...")

    async def execute(self, ctx: BuildContext, on_output: OutputCallback | None) -> None:
        config = ctx.config
        mount_path = config.volume_mount_path

        await ctx.runner.run("hdiutil", ["attach", config.temp_dmg_path], on_output)

        async def detach() -> None:
            await ctx.runner.run("hdiutil", ["detach", mount_path, "-force"])

        # Registered before the wait: attach succeeded even if the volume is slow to show up
        ctx.register("mount", f"Detach {mount_path}", detach)

        mounted = await wait_until(
            lambda: ctx.fs.exists(mount_path),
            timeout=ctx.options.mount_timeout,
            interval=ctx.options.poll_interval,
            sleep=ctx.sleep,
            clock=ctx.clock,
        )
        if not mounted:
            raise VolumeNotMounted(mount_path)
        await emit(on_output, f"Mounted at {mount_path}\n")


class PopulateStep(BuildStep):
    """Copy the app, the Applications link and the background onto the volume."""

    reaches = PipelineState.POPULATED

    def __init__(self) -> None:
        super().__init__("Copying files to volume...")

    async def execute(self, ctx: BuildContext, on_output: OutputCallback | None) -> None:
        config = ctx.config
        mount_path = config.volume_mount_path

        await emit(on_output, f"Copying {config.app_file_name}\n")
        await ctx.runner.run(
            "cp",
            ["-R", config.app_path, posixpath.join(mount_path, config.app_file_name)],
            on_output,
        )

        await ctx.runner.run(
            "ln",
            ["-s", APPLICATIONS_DIR, posixpath.join(mount_path, "Applications")],
            on_output,
        )

        background_dir = posixpath.join(mount_path, BACKGROUND_DIR)
        ctx.fs.make_dirs(background_dir)
        ctx.fs.copy_file(
            config.background_path,
            posixpath.join(background_dir, config.background_file_name),
        )
        await emit(on_output, f"Background: {config.background_file_name}\n")


class UnmountStep(BuildStep):
    """Detach the working image."""

    reaches = PipelineState.UNMOUNTED

    def __init__(self) -> None:
        super().__init__("Unmounting disk image...")

    async def execute(self, ctx: BuildContext, on_output: OutputCallback | None) -> None:
        await ctx.runner.run("hdiutil", ["detach", ctx.config.volume_mount_path], on_output)
        ctx.release("mount")
