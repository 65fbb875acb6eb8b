"""GraphQL query documents for the Contentful content model."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ContentQuery:
    """A named GraphQL document. Variables are supplied per execution."""

    name: str
    document: str


_IMAGE_FIELDS = "url description"

_SPEAKER_FRAGMENT = f"""
            ... on Speaker {{
              name
              jobTitle
              linkedInProfileLink
              photo {{ {_IMAGE_FIELDS} }}
            }}"""

_HOST_FRAGMENT = f"""
            ... on Host {{
              name
              photo {{ {_IMAGE_FIELDS} }}
              linkedin
            }}"""

_PERFORMER_FRAGMENT = f"""
            ... on Performer {{
              name
              title
              photo {{ {_IMAGE_FIELDS} }}
            }}"""

_CARD_FRAGMENT = """
            ... on NewTeamMemberCard {
              firstName
              lastName
              positionTitle
            }"""


STATIC_IMAGES_BY_CODE = ContentQuery(
    name="StaticImagesByCode",
    document="""
query StaticImagesByCode($codes: [String!], $limit: Int!) {
  imageStaticCollection(where: { code_in: $codes }, limit: $limit) {
    items {
      code
      altDiscription
      file {
        url
        description
      }
    }
  }
}
""",
)

EVENT_LIST = ContentQuery(
    name="EventList",
    document="""
query EventList($limit: Int!) {
  eventCollection(order: yearIdentifier_DESC, limit: $limit) {
    items {
      sys { id }
      name
      yearIdentifier
    }
  }
}
""",
)

EVENT_BY_YEAR = ContentQuery(
    name="EventByYear",
    document=f"""
query EventByYear($year: Int!) {{
  eventCollection(where: {{ yearIdentifier: $year }}, limit: 1) {{
    items {{
      sys {{ id }}
      name
      yearIdentifier
      description
      startTime
      endTime
      location
      ticketSaleLink
      image {{ {_IMAGE_FIELDS} }}
      teamPhoto {{ {_IMAGE_FIELDS} }}
      speakersCollection(limit: 48) {{
        items {{
          __typename{_SPEAKER_FRAGMENT}{_HOST_FRAGMENT}{_PERFORMER_FRAGMENT}{_CARD_FRAGMENT}
        }}
      }}
      hostsCollection(limit: 24) {{
        items {{
          __typename{_HOST_FRAGMENT}{_SPEAKER_FRAGMENT}{_PERFORMER_FRAGMENT}{_CARD_FRAGMENT}
        }}
      }}
      performersCollection(limit: 24) {{
        items {{
          __typename{_PERFORMER_FRAGMENT}{_SPEAKER_FRAGMENT}{_CARD_FRAGMENT}
        }}
      }}
      teamsCollection(limit: 12) {{
        items {{
          __typename
          ... on Team {{
            name
            teamMembersCollection(limit: 60) {{
              items {{
                __typename
                ... on NewTeamMemberCard {{
                  firstName
                  lastName
                  positionTitle
                  team
                  isLead
                  linkedInUrl
                  portrait {{ {_IMAGE_FIELDS} }}
                }}
                ... on TeamMember {{
                  name
                  title
                  photo {{ {_IMAGE_FIELDS} }}
                }}
              }}
            }}
          }}
        }}
      }}
    }}
  }}
}}
""",
)

TEAM_BY_YEAR = ContentQuery(
    name="TeamByYear",
    document=f"""
query TeamByYear($year: Int!, $limit: Int!) {{
  newTeamMemberCardCollection(
    where: {{ year: $year }}
    order: [team_ASC, isLead_DESC, positionTitle_ASC, lastName_ASC, firstName_ASC]
    limit: $limit
  ) {{
    items {{
      firstName
      lastName
      positionTitle
      team
      year
      isLead
      linkedInUrl
      portrait {{ {_IMAGE_FIELDS} }}
    }}
  }}
}}
""",
)

EMBEDDED_VIDEOS = ContentQuery(
    name="EmbeddedVideos",
    document="""
query EmbeddedVideos($limit: Int!) {
  newEmbeddedVideoCollection(order: eventYear_DESC, limit: $limit) {
    items {
      sys { id }
      videoTitle
      eventYear
      safeEmbeddingCode {
        json
      }
    }
  }
}
""",
)
