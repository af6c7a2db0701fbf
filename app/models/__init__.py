from .profile import Profile
from .competition import Competition
from .saved_competition import SavedCompetition
from .competition_submission import CompetitionSubmission
from .client_submission import ClientSubmission
