"""User-facing messages returned in responses and error envelopes."""
import enum


class APIMessage(str, enum.Enum):
    ERROR_REQUEST_BODY_FORMAT = "Data from the request body must be a valid JSON"
    ERROR_INVALID_AUTHENTICATION_JWT = "Invalid authentication token or not registered user"
    ERROR_INVALID_STRING_FIELD = "Must be a non-empty string"
    ERROR_INVALID_NUMBER_FIELD = "Must be a number"
    ERROR_INVALID_WHOLE_NUMBER_FIELD = "Must be a whole number"
    ERROR_INVALID_DATE = "Must be a valid ISO 8601 date"
    ERROR_INVALID_EVENT_START_DATE = "Must be a valid ISO 8601 date earlier than the end date"
    ERROR_INVALID_ENUM_FIELD = "Must be one of the following values:"
    ERROR_INVALID_EMAIL_FIELD = "Must be a valid email address"
    ERROR_INVALID_PASSWORD_FIELD = "Must be a non-empty string of at least {min_length} characters long"
    ERROR_INVALID_EVENT_RATING = "Must be a number between {minimum} and {maximum}"
    ERROR_USER_EMAIL_ALREADY_EXISTS = "Already exists a user with the same email address"
    ERROR_INVALID_USER_FIELDS = "All user information must be properly fulfilled"
    ERROR_INVALID_CREDENTIALS_FIELDS = "Credential fields must be properly fulfilled"
    ERROR_INVALID_EVENT_FIELDS = "All event information must be properly fulfilled"
    ERROR_INVALID_EVENT_SEARCH_FIELDS = "Search by title and/or location with non-empty strings"
    ERROR_INVALID_USER_SEARCH_FIELDS = "Search text must be properly fulfilled"
    ERROR_INVALID_MESSAGE_FIELDS = "All message information must be properly fulfilled"
    ERROR_INVALID_ASSISTANCE_FIELDS = "All assistance information must be properly fulfilled"
    ERROR_USER_NOT_EVENT_OWNER = "Only the owner of the event can perform this action"
    ERROR_USER_NOT_ASSISTANCE_OWNER = "Only the attendee or the owner of the event can delete this assistance"
    ERROR_CANNOT_SEND_FRIEND_REQUEST_ITSELF = "A user cannot send a friend request to itself"
    ERROR_CANNOT_ACCEPT_FRIEND_REQUEST_ITSELF = "A user cannot accept a friend request from itself"
    ERROR_CANNOT_DELETE_FRIEND_REQUEST_ITSELF = "A user cannot delete a friend request with itself"
    ERROR_CANNOT_ACCEPT_OWN_FRIEND_REQUEST = "Only the receiver of a friend request can accept it"
    ERROR_CANNOT_SEND_MESSAGE_ITSELF = "A user cannot send a message to itself"
    ERROR_MESSAGE_RECEIVER_NOT_FOUND = "Receiver user does not exist or was not found"
    INVALID_CREDENTIALS = "Invalid email address or password"
    INVALID_USER_ID = "Invalid user ID"
    INVALID_EVENT_ID = "Invalid event ID"
    USER_NOT_FOUND = "User does not exist or was not found"
    USER_DELETED = "User has been deleted"
    EVENT_NOT_FOUND = "Event does not exist or was not found"
    EVENT_DELETED = "Event has been deleted"
    EVENT_NOT_FINISHED = "Assistances can only be rated or commented once the event has finished"
    ASSISTANCE_NOT_FOUND = "Assistance does not exist or was not found"
    ASSISTANCE_CREATED = "Assistance has been created"
    ASSISTANCE_ALREADY_EXISTS = "Assistance already exists"
    ASSISTANCE_DELETED = "Assistance has been deleted"
    FRIEND_REQUEST_SENT = "Friend request has been sent"
    FRIEND_REQUEST_ALREADY_SENT = "Friend request has already been sent"
    FRIEND_REQUEST_ACCEPTED = "Friend request has been accepted"
    FRIEND_REQUEST_NOT_FOUND = "Friend request does not exist or was not found"
    FRIENDSHIP_DELETED = "Friendship or friend request has been deleted"
    ALREADY_FRIENDS = "Users are already friends"
    ROUTE_NOT_FOUND = "Route does not exist"
    INTERNAL_SERVER_ERROR = "Internal server error"


class DatabaseMessage(str, enum.Enum):
    ERROR_INSERTING_USER = "An error has occurred while creating a new user on the database"
    ERROR_SELECTING_ALL_USERS = "An error has occurred while fetching all the users from the database"
    ERROR_SELECTING_USER_BY_ID = "An error has occurred while fetching a user by ID from the database"
    ERROR_SELECTING_USERS_BY_TEXT = "An error has occurred while fetching users by text from the database"
    ERROR_SELECTING_USER_STATISTICS = "An error has occurred while calculating the statistics of a user"
    ERROR_LOGGING_IN = "An error has occurred while checking the credentials of a user"
    ERROR_UPDATING_USER = "An error has occurred while updating a user from the database"
    ERROR_DELETING_USER = "An error has occurred while deleting a user from the database"
    ERROR_SELECTING_ALL_EVENTS = "An error has occurred while fetching all the events from the database"
    ERROR_SELECTING_POPULAR_EVENTS = "An error has occurred while fetching the popular events from the database"
    ERROR_SELECTING_USER_EVENTS = "An error has occurred while fetching the events of a user from the database"
    ERROR_INSERTING_EVENT = "An error has occurred while creating a new event to the database"
    ERROR_SELECTING_EVENT_BY_ID = "An error has occurred while fetching an event by ID from the database"
    ERROR_SELECTING_EVENTS_BY_SEARCH = "An error has occurred while fetching events by search parameters from the database"
    ERROR_UPDATING_EVENT = "An error has occurred while updating an event from the database"
    ERROR_DELETING_EVENT = "An error has occurred while deleting an event from the database"
    ERROR_SELECTING_EVENT_ASSISTANCES = "An error has occurred while fetching the assistances of an event from the database"
    ERROR_SELECTING_USER_ASSISTANCES = "An error has occurred while fetching the assistances of a user from the database"
    ERROR_SELECTING_USER_ASSISTANCE_FOR_EVENT = "An error has occurred while fetching an assistance of a user for an event from the database"
    ERROR_INSERTING_ASSISTANCE = "An error has occurred while creating a new assistance on the database"
    ERROR_UPDATING_ASSISTANCE = "An error has occurred while updating an assistance from the database"
    ERROR_DELETING_USER_ASSISTANCE_FOR_EVENT = "An error has occurred while deleting an assistance of a user for an event from the database"
    ERROR_INSERTING_MESSAGE = "An error has occurred while creating a new message on the database"
    ERROR_SELECTING_USER_CONTACTS = "An error has occurred while fetching all the contacts of a user from the database"
    ERROR_SELECTING_USERS_CHAT = "An error has occurred while fetching all the messages of a chat from the database"
    ERROR_SELECTING_FRIENDSHIP_REQUESTS = "An error has occurred while fetching all the friend requests of a user from the database"
    ERROR_SELECTING_FRIENDS = "An error has occurred while fetching all the friends of a user from the database"
    ERROR_INSERTING_FRIEND_REQUEST = "An error has occurred while creating a new friend request to the database"
    ERROR_UPDATING_FRIEND_REQUEST = "An error has occurred while accepting a friend request from the database"
    ERROR_DELETING_FRIEND_REQUEST = "An error has occurred while deleting a friendship or a friend request from the database"
