"""CLI entry point for the video creator."""

import logging
import typer
from pathlib import Path
from typing import Optional
from enum import Enum

from . import __version__
from .config import config
from .errors import ConfigurationError

app = typer.Typer(
    name="reel-maker",
    help="Chat-driven AI video creator",
    no_args_is_help=True
)


def setup_logging(verbose: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
    )


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"reel-maker version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-V",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit"
    )
) -> None:
    """Reel Maker - Turn video ideas into storyboards and clips using AI."""
    pass


class Platform(str, Enum):
    """Target platforms."""
    TIKTOK = "tiktok"
    YOUTUBE = "youtube"
    YOUTUBE_SHORTS = "youtube-shorts"
    INSTAGRAM = "instagram"
    INSTAGRAM_REELS = "instagram-reels"


@app.command()
def serve(
    host: str = typer.Option("127.0.0.1", "--host", help="Bind address"),
    port: int = typer.Option(8000, "--port", "-p", help="Bind port"),
    reload: bool = typer.Option(False, "--reload", help="Reload on code changes"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
) -> None:
    """Run the HTTP API server."""
    import uvicorn

    setup_logging(verbose)

    for check in (
        config.validate_required,
        config.validate_video_required,
        config.validate_search_required,
    ):
        try:
            check()
        except ConfigurationError as e:
            typer.echo(f"⚠️  {e}")

    typer.echo(f"🚀 Serving reel-maker API on http://{host}:{port}")
    uvicorn.run(
        "reelmaker.api.main:app",
        host=host,
        port=port,
        reload=reload,
        log_level="debug" if verbose else "info",
    )


def _print_scenes(scenes) -> None:
    if not scenes:
        typer.echo("   (no scenes yet)")
        return
    for scene in scenes:
        typer.echo(f"   [{scene.id}] {scene.duration}")
        typer.echo(f"       {scene.description}")
        if scene.visual_elements:
            typer.echo(f"       → {', '.join(scene.visual_elements)}")


def _scene_id(text: str) -> Optional[int]:
    """Parse a scene id argument, reporting a bad one."""
    try:
        return int(text)
    except ValueError:
        typer.echo(f"❌ Expected a numeric scene id, got '{text}'")
        return None


STUDIO_HELP = """Commands:
   /scenes                     Show the storyboard
   /edit ID TEXT               Replace a scene description
   /elements ID A; B; C        Replace a scene's visual elements
   /delete ID                  Remove a scene
   /render ID                  Generate a clip for one scene
   /render-all                 Generate a clip from the storyboard
   /save PATH                  Save the storyboard as YAML
   /history                    List saved videos
   /quit                       Leave the studio"""


@app.command()
def studio(
    platform: Platform = typer.Option(
        Platform.TIKTOK,
        "--platform",
        "-p",
        help="Target platform"
    ),
    length: int = typer.Option(
        30,
        "--length",
        "-l",
        help="Target duration in seconds",
        min=5,
        max=600
    ),
    api_url: Optional[str] = typer.Option(
        None,
        "--api",
        help="API base URL (defaults to REELMAKER_API_URL)"
    ),
    storyboard: Optional[Path] = typer.Option(
        None,
        "--storyboard",
        "-s",
        help="Start from a saved storyboard YAML file",
        exists=True,
        file_okay=True,
        dir_okay=False
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
) -> None:
    """Chat with the video assistant and render clips."""
    from .studio import StudioError, StudioSession

    setup_logging(verbose)
    session = StudioSession(api_url=api_url, platform=platform.value, video_length=length)

    if storyboard:
        loaded = session.load_storyboard(storyboard)
        typer.echo(f"📁 Loaded storyboard: {loaded.title} ({len(loaded.scenes)} scenes)")

    typer.echo(f"🎬 {session.messages[0].content}")
    typer.echo("   Type /help for commands.\n")

    while True:
        try:
            line = typer.prompt("you", prompt_suffix="> ").strip()
        except (EOFError, typer.Abort):
            break

        if not line:
            continue

        if not line.startswith("/"):
            reply = session.send(line)
            if reply is None:
                _print_scenes(session.storyboard)
                continue
            typer.echo(f"\n🤖 {reply.content}\n")
            if reply.scenes:
                typer.echo("📽️  Storyboard:")
                _print_scenes(reply.scenes)
                typer.echo("")
            continue

        command, _, rest = line.partition(" ")
        rest = rest.strip()

        if command in ("/quit", "/exit"):
            break

        try:
            if command == "/help":
                typer.echo(STUDIO_HELP)
            elif command == "/scenes":
                _print_scenes(session.storyboard)
            elif command in ("/edit", "/elements"):
                raw_id, _, text = rest.partition(" ")
                scene_id = _scene_id(raw_id)
                if scene_id is None:
                    continue
                if command == "/edit":
                    session.edit_scene(scene_id, description=text.strip())
                else:
                    elements = [e.strip() for e in text.split(";")]
                    session.edit_scene(scene_id, visual_elements=elements)
                typer.echo(f"✏️  Scene {scene_id} updated")
            elif command == "/delete":
                scene_id = _scene_id(rest)
                if scene_id is None:
                    continue
                if session.delete_scene(scene_id):
                    typer.echo(f"🗑️  Scene {scene_id} removed")
                else:
                    typer.echo(f"❌ No scene {scene_id}")
            elif command == "/render":
                scene_id = _scene_id(rest)
                if scene_id is None:
                    continue
                typer.echo(f"⏳ Generating scene {scene_id}...")
                video = session.generate_scene_video(scene_id)
                typer.echo(f"✅ {video.title}: {video.video_url}")
            elif command == "/render-all":
                typer.echo("⏳ Generating video...")
                video = session.generate_storyboard_video()
                typer.echo(f"✅ {video.title}: {video.video_url}")
            elif command == "/save":
                path = Path(rest or "storyboard.yaml")
                session.export_storyboard(path)
                typer.echo(f"✅ Storyboard saved: {path}")
            elif command == "/history":
                _print_history(session.history.videos)
            else:
                typer.echo(f"❌ Unknown command: {command}")
        except KeyError as e:
            typer.echo(f"❌ {e.args[0]}")
        except StudioError as e:
            typer.echo(f"❌ Generation failed: {e}")
        except (ValueError, OSError) as e:
            typer.echo(f"❌ {e}")

    typer.echo("👋 Bye")


def _print_history(videos) -> None:
    if not videos:
        typer.echo("   No videos yet. Generate your first video to see it here.")
        return
    for video in videos:
        created = video.created_at.strftime("%Y-%m-%d %H:%M")
        typer.echo(f"   • {video.title} ({video.duration}s, {created})")
        typer.echo(f"     id: {video.id}")
        typer.echo(f"     {video.video_url}")


@app.command()
def history(
    page: int = typer.Option(
        1,
        "--page",
        help="Page to show (6 videos per page)",
        min=1
    ),
    path: Optional[Path] = typer.Option(
        None,
        "--file",
        "-f",
        help="History file (defaults to REELMAKER_HISTORY_PATH)"
    ),
    delete: Optional[str] = typer.Option(
        None,
        "--delete",
        "-d",
        help="Delete the video with this id"
    ),
) -> None:
    """List or prune saved videos."""
    from .history import VideoHistory

    store = VideoHistory(path)

    if delete:
        if store.delete(delete):
            typer.echo(f"🗑️  Deleted {delete}")
        else:
            typer.echo(f"❌ No video with id {delete}")
            raise typer.Exit(1)
        return

    total_pages = store.page_count()
    typer.echo(f"📼 Your Video History: {len(store)} {'video' if len(store) == 1 else 'videos'} generated")
    if total_pages and page > total_pages:
        typer.echo(f"❌ Page {page} out of range (1-{total_pages})")
        raise typer.Exit(1)

    _print_history(store.page(page - 1))
    if total_pages > 1:
        typer.echo(f"\n   Page {page}/{total_pages}")


if __name__ == "__main__":
    app()
