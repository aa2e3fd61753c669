# --- DAO (Target contract, owned by the Governor) ---
DAO_ABI = [
    {
        "inputs": [{"internalType": "address", "name": "_governor", "type": "address"}],
        "stateMutability": "nonpayable",
        "type": "constructor"
    },
    {
        "inputs": [{"internalType": "uint256", "name": "_newValue", "type": "uint256"}],
        "name": "updateValue",
        "outputs": [],
        "stateMutability": "nonpayable",
        "type": "function"
    },
    {
        "inputs": [],
        "name": "daoVal",
        "outputs": [{"internalType": "uint256", "name": "", "type": "uint256"}],
        "stateMutability": "view",
        "type": "function"
    }
]
