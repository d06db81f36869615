"""Recording categories of the CANN MEG protocol.

Each session has two eyes-open resting recordings and two runs of a virtual
Morris water maze; empty room recordings are collected on the same days and
serve as the noise reference for every other recording of that date.
"""
from typing import Optional

from pydantic import BaseModel, ConfigDict

from cannbids_constants import NOISE_TASK

REST_INSTRUCTIONS = (
    'Participants were instructed to relax and remain as still as possible, while keeping their eyes '
    'focussed on the central fixation cross'
)
REST_COGATLAS = 'http://www.cognitiveatlas.org/task/id/trm_4c8a834779883/'
REST_COGPO = 'http://wiki.cogpo.org/index.php?title=Rest'
WATERMAZE_COGATLAS = 'http://www.cognitiveatlas.org/task/id/trm_4f241173868a3/'


class RecordingCategory(BaseModel):
    model_config = ConfigDict(frozen=True)

    key: str
    task: str
    run: Optional[int] = None
    description: Optional[str] = None
    instructions: Optional[str] = None
    cog_atlas_id: Optional[str] = None
    cogpo_id: Optional[str] = None
    # Replace subject and session with the empty room sentinel and acquisition date
    emptyroom: bool = False

    def task_entries(self) -> dict:
        """Task metadata for the recording sidecar, without unset fields."""
        entries = {
            'TaskName': self.task,
            'TaskDescription': self.description,
            'Instructions': self.instructions,
            'CogAtlasID': self.cog_atlas_id,
            'CogPOID': self.cogpo_id,
        }
        return {k: v for k, v in entries.items() if v is not None}


RECORDING_CATEGORIES = {
    'rest1': RecordingCategory(
        key='first-rest',
        task='rest',
        run=1,
        description=(
            'Beginning of session resting recordings with eyes open, central fixation cross, '
            'rest period (min 6 minutes)'
        ),
        instructions=REST_INSTRUCTIONS,
        cog_atlas_id=REST_COGATLAS,
        cogpo_id=REST_COGPO,
    ),
    'rest2': RecordingCategory(
        key='post-task-rest',
        task='restbreak',
        run=1,
        description=(
            'After first run of watermaze task, resting recordings with eyes open, central fixation '
            'cross, rest period (min 6 minutes)'
        ),
        instructions=REST_INSTRUCTIONS,
        cog_atlas_id=REST_COGATLAS,
        cogpo_id=REST_COGPO,
    ),
    'watermaze1': RecordingCategory(
        key='navigation-task-run-1',
        task='watermaze',
        run=1,
        description=(
            'Virtual Morris Watermaze. First run involves 30 trials, most with platform visible. '
            'Probe trials intermixed, in which platform is hidden for 30 seconds and only emerges a '
            'this point if participant has not located it.'
        ),
        instructions=(
            'Try and navigate to the platform as quickly and directly as possible. Some trials the '
            'platform will be visible, others it will not, but it is important to seek it out, as the '
            'platform may just be hidden.'
        ),
        cog_atlas_id=WATERMAZE_COGATLAS,
    ),
    'watermaze2': RecordingCategory(
        key='navigation-task-run-2',
        task='watermaze',
        run=2,
        description=(
            'Virtual Morris Watermaze. Second run involves 4 trials, 2 with platform visible but no '
            'external cues, 2 with learned environment but no platform to assess long term retention. '
            'In blank control trials, participants asked to just explore the environment, with no '
            'platform.'
        ),
        instructions=(
            'Try and navigate to the platform as quickly and directly as possible. In trials with no '
            'cues on the walls, please explore the environment (keep moving about). In trials with '
            'familiar environment, please try and navigate to the platform.'
        ),
        cog_atlas_id=WATERMAZE_COGATLAS,
    ),
    'empty': RecordingCategory(
        key='background-noise-reference',
        task=NOISE_TASK,
        emptyroom=True,
    ),
}


def classify(task_token: str) -> Optional[RecordingCategory]:
    """
    Look up the recording category of a task token, ignoring case.
    Returns None when the token does not name a known recording.
    """
    if not task_token:
        return None
    return RECORDING_CATEGORIES.get(task_token.lower())
