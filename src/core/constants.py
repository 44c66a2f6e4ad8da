from pydantic import BaseModel


class Colours(BaseModel):
    """Colour codes."""

    kick_green: int = 0x3BA55C


class Messages(BaseModel):
    """Canned replies shared between the moderation commands."""

    no_users: str = "No valid users were given."
    infraction_not_found: str = "This infraction ID doesn't exist!"
    unauthorized: str = "One of the users has a role higher than or equal to yours."
    duration_out_of_range: str = "The duration of this infraction is out of range, please fix it in the catalog."
    infrastructure_failure: str = "Something went wrong while talking to Discord or the database, please try again."
    no_reason: str = "No reason provided"


class Constants(BaseModel):
    """The app constants."""

    colours: Colours = Colours()
    messages: Messages = Messages()

    # Discord caps a single embed field value at 1024 characters.
    embed_field_limit: int = 1024
    # Catalog and history entries shown per paginator page.
    entries_per_page: int = 5


constants = Constants()
