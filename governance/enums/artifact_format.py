from enum import Enum


class ArtifactFormat(str, Enum):
    TRUFFLE = "truffle"
    HARDHAT = "hardhat"
    FOUNDRY = "foundry"
